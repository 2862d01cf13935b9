"""Delete confirmation modal."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Center, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from ...models import Task


class ConfirmModal(ModalScreen[bool]):
    """Asks before deleting a task. Dismisses with True to delete."""

    DEFAULT_CSS = """
    ConfirmModal {
        align: center middle;
    }

    ConfirmModal > Vertical {
        width: 56;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: solid $error;
    }

    ConfirmModal Label {
        width: 100%;
        text-align: center;
        text-style: bold;
    }

    ConfirmModal .task-quote {
        width: 100%;
        text-align: center;
        color: $text-muted;
        margin: 1 0;
    }

    ConfirmModal .buttons {
        width: 100%;
        height: auto;
        align: center middle;
    }

    ConfirmModal Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("y", "confirm", "Delete"),
        Binding("n", "cancel", "Keep"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, task_data: Task) -> None:
        super().__init__()
        self.task_data = task_data

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("Delete this task?")
            yield Static(f"“{self.task_data.text}”", classes="task-quote", markup=False)
            with Center(classes="buttons"):
                yield Button("Delete (y)", id="yes", variant="error")
                yield Button("Keep (n)", id="no", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
