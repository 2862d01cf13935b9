"""Main kanban board screen."""

from __future__ import annotations

from dataclasses import dataclass

from textual import events
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.errors import NoWidget
from textual.screen import Screen
from textual.widget import Widget
from textual.widgets import Footer, Header, Static

from ...models import Column, Task
from ...services import BoardService, DragEvent, OverTarget, Rect
from ..widgets.column import KanbanColumn
from ..widgets.task_card import TaskCard


@dataclass
class _PointerGrab:
    """A card pressed with the mouse, possibly being dragged."""

    task_id: str
    press_x: int
    press_y: int
    grab_offset: int
    height: int
    dragging: bool = False


class BoardScreen(Screen):
    """Board with three columns, navigation and drag and drop."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._current_column = 0
        self._current_task = 0
        self._pending_focus_id: str | None = None
        self._grab: _PointerGrab | None = None

    @property
    def board_service(self) -> BoardService:
        return self.app.board_service  # pyrefly: ignore[missing-attribute]

    @property
    def columns(self) -> list[Column]:
        return Column.ordered()

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="error-banner", classes="error-banner")
        yield Static("Loading tasks...", id="loading", classes="loading")

        with Container(id="board-container"), Horizontal(id="columns"):
            for column in self.columns:
                yield KanbanColumn(column, id=f"column-{column.value}")

        yield Footer()

    def on_mount(self) -> None:
        """Show the loading state, then fetch once the screen has painted."""
        self._update_banner()
        self.call_after_refresh(self.reload_board)

    # --- Data ---

    def reload_board(self) -> None:
        """Fetch all tasks from the server and redraw."""
        self.board_service.load_tasks()
        self._set_loading(False)
        self.refresh_board()

    def refresh_board(self, focus_task_id: str | None = None) -> None:
        """
        Redraw the columns from the board store.

        Args:
            focus_task_id: If provided, focus this task after refresh.
                           If None, keeps the current position.
        """
        dragging_id = self.board_service.dragging_id
        for column in self.columns:
            widget = self._get_column(self.columns.index(column))
            if widget is not None:
                widget.set_tasks(self.board_service.store.tasks(column), dragging_id)

        self._update_banner()
        self._pending_focus_id = focus_task_id
        # Columns rebuild their cards after a refresh; focus after that
        self.call_after_refresh(self._schedule_pending_focus)

    def _schedule_pending_focus(self) -> None:
        self.call_after_refresh(self._apply_pending_focus)

    def _apply_pending_focus(self) -> None:
        if self._pending_focus_id:
            position = self.board_service.store.find(self._pending_focus_id)
            if position:
                column, index = position
                self._current_column = self.columns.index(column)
                self._current_task = index
                self._update_focus()
                return

        column = self._get_column(self._current_column)
        if column and column.task_count > 0:
            self._current_task = min(self._current_task, column.task_count - 1)
        else:
            self._current_task = 0
        self._update_focus()

    def _set_loading(self, loading: bool) -> None:
        try:
            self.query_one("#loading", Static).display = loading
        except Exception:
            pass

    def _update_banner(self) -> None:
        """Show or hide the error banner."""
        try:
            banner = self.query_one("#error-banner", Static)
        except Exception:
            return
        error = self.board_service.error
        if error:
            banner.update(f"{error} [dim](x to dismiss)[/]")
            banner.display = True
        else:
            banner.update("")
            banner.display = False

    def dismiss_error(self) -> None:
        self.board_service.dismiss_error()
        self._update_banner()

    # --- Navigation ---

    def navigate_column(self, delta: int) -> None:
        new_column = max(0, min(self._current_column + delta, self.column_count - 1))
        if new_column != self._current_column:
            self._current_column = new_column
            column = self._get_column(new_column)
            if column and column.task_count > 0:
                self._current_task = min(self._current_task, column.task_count - 1)
            else:
                self._current_task = 0
            self._update_focus()

    def navigate_task(self, delta: int) -> None:
        column = self._get_column(self._current_column)
        if column is None or column.task_count == 0:
            return
        new_task = max(0, min(self._current_task + delta, column.task_count - 1))
        if new_task != self._current_task:
            self._current_task = new_task
            self._update_focus()

    def _get_column(self, index: int) -> KanbanColumn | None:
        if index < 0 or index >= self.column_count:
            return None
        try:
            return self.query_one(f"#column-{self.columns[index].value}", KanbanColumn)
        except Exception:
            return None

    def _update_focus(self) -> None:
        column = self._get_column(self._current_column)
        if column:
            column.focus_task(self._current_task)

    def get_current_task(self) -> Task | None:
        column = self._get_column(self._current_column)
        if column:
            return column.get_task(self._current_task)
        return None

    @property
    def current_column(self) -> Column:
        return self.columns[self._current_column]

    # --- Keyboard drag ---

    @property
    def is_dragging(self) -> bool:
        return self.board_service.dragging_id is not None

    def toggle_drag(self) -> None:
        """Pick up the focused task, or drop the one being dragged."""
        if self.is_dragging:
            self.drop_task()
            return
        task = self.get_current_task()
        if task is not None and self.board_service.drag_start(task.id):
            self.refresh_board(focus_task_id=task.id)

    def move_dragged(self, direction: str) -> None:
        """Move the dragged task one step (keyboard sensor)."""
        active_id = self.board_service.dragging_id
        if active_id is None:
            return
        if self.board_service.drag_move(direction):  # pyrefly: ignore[bad-argument-type]
            self.refresh_board(focus_task_id=active_id)

    def drop_task(self, event: DragEvent | None = None) -> None:
        active_id = self.board_service.dragging_id
        if active_id is None:
            return
        self.board_service.drop(event)
        self.refresh_board(focus_task_id=active_id)

    def cancel_drag(self) -> bool:
        active_id = self.board_service.dragging_id
        if not self.board_service.drag_cancel():
            return False
        self._grab = None
        self.refresh_board(focus_task_id=active_id)
        return True

    # --- Mouse drag ---

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if self.is_dragging:
            return
        card = self._card_at(event.screen_x, event.screen_y)
        if card is None:
            return
        position = self.board_service.store.find(card.task.id)
        if position:
            column, index = position
            self._current_column = self.columns.index(column)
            self._current_task = index

        region = card.region
        self._grab = _PointerGrab(
            task_id=card.task.id,
            press_x=event.screen_x,
            press_y=event.screen_y,
            grab_offset=event.screen_y - region.y,
            height=region.height,
        )
        self.capture_mouse()

    def on_mouse_move(self, event: events.MouseMove) -> None:
        grab = self._grab
        if grab is None:
            return
        if not grab.dragging:
            if (event.screen_x, event.screen_y) == (grab.press_x, grab.press_y):
                return
            if not self.board_service.drag_start(grab.task_id):
                self._release_grab()
                return
            grab.dragging = True
        if self.board_service.drag_over(self._pointer_event(grab, event)):
            self.refresh_board(focus_task_id=grab.task_id)

    def on_mouse_up(self, event: events.MouseUp) -> None:
        grab = self._grab
        if grab is None:
            return
        self._release_grab()
        if grab.dragging:
            self.drop_task(self._pointer_event(grab, event))

    def _release_grab(self) -> None:
        self._grab = None
        self.capture_mouse(False)

    def _pointer_event(self, grab: _PointerGrab, event: events.MouseEvent) -> DragEvent:
        """Translate a pointer position into a hover/drop event."""
        active_rect = Rect(top=event.screen_y - grab.grab_offset, height=grab.height)
        return DragEvent(grab.task_id, self._target_at(event.screen_x, event.screen_y), active_rect)

    def _widget_at(self, x: int, y: int) -> Widget | None:
        try:
            widget, _ = self.get_widget_at(x, y)
        except NoWidget:
            return None
        return widget

    def _card_at(self, x: int, y: int) -> TaskCard | None:
        widget = self._widget_at(x, y)
        while widget is not None and not isinstance(widget, TaskCard):
            widget = widget.parent if isinstance(widget.parent, Widget) else None
        return widget

    def _target_at(self, x: int, y: int) -> OverTarget | None:
        """Resolve what is under the pointer: a card, a column surface or nothing."""
        widget = self._widget_at(x, y)
        while widget is not None:
            if isinstance(widget, TaskCard):
                region = widget.region
                return OverTarget.task(widget.task.id, Rect(top=region.y, height=region.height))
            if isinstance(widget, KanbanColumn):
                return OverTarget.surface(widget.column)
            widget = widget.parent if isinstance(widget.parent, Widget) else None
        return None
