"""taskboard TUI Application."""

from textual.app import App
from textual.binding import Binding
from textual.screen import ModalScreen

from .client import TaskApiClient
from .config import Settings
from .models import Column, Task
from .services import BoardService
from .ui.screens.board import BoardScreen
from .ui.widgets import ConfirmModal, HelpScreen, TaskInputModal


class TaskboardApp(App):
    """Kanban board backed by the task API."""

    TITLE = "Kanban Board"

    CSS_PATH = "ui/styles.tcss"

    BINDINGS = [
        # Core bindings
        Binding("q", "quit", "Quit", show=True),
        Binding("?", "help", "Help", show=True),
        Binding("r", "reload", "Reload", show=True),
        # Navigation - vim style
        Binding("h", "nav_left", "← Column", show=False),
        Binding("j", "nav_down", "↓ Task", show=False),
        Binding("k", "nav_up", "↑ Task", show=False),
        Binding("l", "nav_right", "→ Column", show=False),
        # Navigation - arrow keys
        Binding("left", "nav_left", "← Column", show=False),
        Binding("down", "nav_down", "↓ Task", show=False),
        Binding("up", "nav_up", "↑ Task", show=False),
        Binding("right", "nav_right", "→ Column", show=False),
        # Task actions
        Binding("n", "new_task", "New", show=True),
        Binding("e", "edit_task", "Edit", show=True),
        Binding("enter", "edit_task", "Edit", show=False),
        Binding("d", "delete_task", "Delete", show=True),
        Binding("space", "toggle_drag", "Pick up/Drop", show=True),
        Binding("x", "dismiss_error", "Dismiss error", show=False),
        Binding("escape", "escape", "Back", show=False, priority=True),
    ]

    SCREENS = {
        "board": BoardScreen,
    }

    def __init__(
        self,
        settings: Settings | None = None,
        api: TaskApiClient | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self._init_services(api)

    def _init_services(self, api: TaskApiClient | None) -> None:
        """Initialize the API client and board service."""
        self.api = api or TaskApiClient.from_settings(self.settings)
        self.board_service = BoardService(self.api)

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen("board")

    def on_unmount(self) -> None:
        self.api.close()

    def _board_screen(self) -> BoardScreen | None:
        screen = self.screen
        if isinstance(screen, BoardScreen):
            return screen
        return None

    def action_reload(self) -> None:
        """Reload all tasks from the server."""
        screen = self._board_screen()
        if screen is not None:
            screen.reload_board()

    def action_help(self) -> None:
        """Show help screen."""
        self.push_screen(HelpScreen())

    def action_dismiss_error(self) -> None:
        screen = self._board_screen()
        if screen is not None:
            screen.dismiss_error()

    # Navigation actions; while a task is picked up they move it instead
    def _navigate(self, direction: str) -> None:
        screen = self._board_screen()
        if screen is None:
            return
        if screen.is_dragging:
            screen.move_dragged(direction)
        elif direction == "left":
            screen.navigate_column(-1)
        elif direction == "right":
            screen.navigate_column(1)
        elif direction == "up":
            screen.navigate_task(-1)
        else:
            screen.navigate_task(1)

    def action_nav_left(self) -> None:
        """Navigate to previous column."""
        self._navigate("left")

    def action_nav_right(self) -> None:
        """Navigate to next column."""
        self._navigate("right")

    def action_nav_up(self) -> None:
        """Navigate to previous task."""
        self._navigate("up")

    def action_nav_down(self) -> None:
        """Navigate to next task."""
        self._navigate("down")

    # Task actions
    def action_new_task(self) -> None:
        """Ask for the text of a new task."""
        screen = self._board_screen()
        if screen is None or screen.is_dragging:
            return

        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            TaskInputModal("New task"),
            callback=self._handle_new_task,
        )

    def _handle_new_task(self, text: str | None) -> None:
        screen = self._board_screen()
        if screen is None or text is None:
            return

        task = self.board_service.add_task(text)
        if task is not None:
            screen.refresh_board(focus_task_id=task.id)
            self.notify("Task created", timeout=2)
        else:
            screen.refresh_board()

    def action_edit_task(self) -> None:
        """Edit the focused task's text."""
        screen = self._board_screen()
        if screen is None or screen.is_dragging:
            return

        task = screen.get_current_task()
        if task is None:
            return

        column = screen.current_column

        def handle_edit(text: str | None) -> None:
            self._handle_edit(column, task, text)

        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            TaskInputModal("Edit task", value=task.text),
            callback=handle_edit,
        )

    def _handle_edit(self, column: Column, task: Task, text: str | None) -> None:
        screen = self._board_screen()
        if screen is None or text is None or text.strip() == task.text:
            return

        self.board_service.save_edit(column, task.id, text)
        screen.refresh_board(focus_task_id=task.id)

    def action_delete_task(self) -> None:
        """Delete the focused task (with confirmation)."""
        screen = self._board_screen()
        if screen is None or screen.is_dragging:
            return

        task = screen.get_current_task()
        if task is None:
            return

        column = screen.current_column

        def handle_confirm(confirmed: bool | None) -> None:
            self._handle_delete_confirm(column, task, bool(confirmed))

        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            ConfirmModal(task),
            callback=handle_confirm,
        )

    def _handle_delete_confirm(self, column: Column, task: Task, confirmed: bool) -> None:
        """Handle delete confirmation result."""
        if not confirmed:
            return

        screen = self._board_screen()
        if screen is None:
            return

        if self.board_service.delete_task(column, task.id):
            self.notify("Task deleted", timeout=2)
        screen.refresh_board()

    def action_toggle_drag(self) -> None:
        """Pick up the focused task, or drop the one being dragged."""
        screen = self._board_screen()
        if screen is not None:
            screen.toggle_drag()

    def action_escape(self) -> None:
        """Handle escape: dismiss modal or cancel a drag."""
        screen = self.screen

        # If we're on a modal screen, dismiss it
        if isinstance(screen, ModalScreen):
            screen.dismiss()
            return

        if isinstance(screen, BoardScreen):
            screen.cancel_drag()


def run(settings: Settings | None = None) -> None:
    """Run the taskboard application."""
    app = TaskboardApp(settings)
    app.run()
