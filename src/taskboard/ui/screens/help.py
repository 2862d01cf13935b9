"""Help screen showing keyboard shortcuts."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Static


class HelpScreen(ModalScreen):
    """Modal help screen showing keyboard and mouse controls."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > Vertical {
        width: 64;
        height: auto;
        max-height: 90%;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    HelpScreen .help-title {
        text-align: center;
        text-style: bold;
        padding-bottom: 1;
        border-bottom: solid $primary-darken-2;
    }

    HelpScreen .help-section {
        height: auto;
        padding: 1 0 0 0;
    }

    HelpScreen .section-title {
        text-style: bold;
        color: $primary;
    }

    HelpScreen .help-row {
        height: 1;
    }

    HelpScreen .help-key {
        width: 18;
        text-style: bold;
    }

    HelpScreen .help-desc {
        width: 1fr;
        color: $text-muted;
    }

    HelpScreen .help-footer {
        text-align: center;
        color: $text-muted;
        padding-top: 1;
        border-top: solid $primary-darken-2;
    }
    """

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=False),
        Binding("?", "dismiss", "Close", show=False),
        Binding("q", "dismiss", "Close", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Keyboard Shortcuts", classes="help-title")

            with Vertical(classes="help-section"):
                yield Static("Navigation", classes="section-title")
                yield self._help_row("h / Left", "Previous column")
                yield self._help_row("l / Right", "Next column")
                yield self._help_row("k / Up", "Previous task")
                yield self._help_row("j / Down", "Next task")

            with Vertical(classes="help-section"):
                yield Static("Tasks", classes="section-title")
                yield self._help_row("n", "Add task")
                yield self._help_row("e / Enter", "Edit task text")
                yield self._help_row("d", "Delete task")

            with Vertical(classes="help-section"):
                yield Static("Drag and Drop", classes="section-title")
                yield self._help_row("Space", "Pick up / drop task")
                yield self._help_row("Arrows / hjkl", "Move picked-up task")
                yield self._help_row("Escape", "Cancel drag")
                yield self._help_row("Mouse drag", "Drag a card onto a card or column")

            with Vertical(classes="help-section"):
                yield Static("General", classes="section-title")
                yield self._help_row("r", "Reload from server")
                yield self._help_row("x", "Dismiss error")
                yield self._help_row("?", "Show this help")
                yield self._help_row("q", "Quit")

            yield Static("Press any key to close", classes="help-footer")

    def _help_row(self, key: str, description: str) -> Horizontal:
        """Create a help row with key and description."""
        row = Horizontal(classes="help-row")
        row.compose_add_child(Static(key, classes="help-key"))
        row.compose_add_child(Static(description, classes="help-desc"))
        return row

    def on_key(self, event) -> None:
        """Dismiss on any key press and prevent propagation."""
        event.stop()
        self.dismiss()
