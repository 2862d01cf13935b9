"""Modal for entering task text."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label


class TaskInputModal(ModalScreen[str | None]):
    """Modal dialog asking for a task description.

    Dismisses with the entered text on Enter, or None on Escape.
    """

    DEFAULT_CSS = """
    TaskInputModal {
        align: center middle;
    }

    TaskInputModal > Vertical {
        width: 60;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    TaskInputModal Label {
        width: 100%;
        text-style: bold;
        margin-bottom: 1;
    }

    TaskInputModal .hint {
        color: $text-muted;
        text-style: none;
        margin-top: 1;
        margin-bottom: 0;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, title: str, value: str = "") -> None:
        super().__init__()
        self.title_text = title
        self.initial_value = value

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(self.title_text)
            yield Input(
                value=self.initial_value,
                placeholder="Enter task description...",
                id="task-text-input",
            )
            yield Label("Enter to save, Esc to cancel", classes="hint")

    def on_mount(self) -> None:
        self.query_one(Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)
