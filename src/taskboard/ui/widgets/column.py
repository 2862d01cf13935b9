"""Kanban column widget."""

import re

from textual.actions import SkipAction
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Static

from ...models import Column, Task
from .task_card import TaskCard


def _task_css_id(task_id: str) -> str:
    """Generate CSS-safe ID from a task id (e.g. "task-1718000000000")."""
    safe_id = re.sub(r"[^a-zA-Z0-9\-]", "-", task_id)
    safe_id = safe_id.strip("-").lower()
    return safe_id or "task"


class TaskListScroll(VerticalScroll):
    """Scroll container for task lists.

    Raises SkipAction for navigation keys so they bubble up to the App
    for task navigation instead of being handled as scroll actions.
    """

    def action_scroll_up(self) -> None:
        raise SkipAction()

    def action_scroll_down(self) -> None:
        raise SkipAction()

    def action_scroll_home(self) -> None:
        raise SkipAction()

    def action_scroll_end(self) -> None:
        raise SkipAction()

    def action_page_up(self) -> None:
        raise SkipAction()

    def action_page_down(self) -> None:
        raise SkipAction()


class EmptyColumnMessage(Static):
    """Displayed when a column has no tasks."""

    pass


class KanbanColumn(Widget):
    """A single column in the kanban board; its body is a drop surface."""

    def __init__(
        self,
        column: Column,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.column = column
        self._tasks: list[Task] = []
        self._dragging_id: str | None = None

    def compose(self) -> ComposeResult:
        """Create column layout."""
        yield Static(
            self._header_text, classes="column-header", id=f"header-{self.column.value}"
        )
        yield TaskListScroll(classes="column-content", id=f"content-{self.column.value}")

    def on_mount(self) -> None:
        if self._tasks:
            self.call_after_refresh(self._refresh_tasks)

    @property
    def _header_text(self) -> str:
        """Header text with styled task count."""
        return f"{self.column.display_title} [dim]({len(self._tasks)})[/]"

    def set_tasks(self, tasks: list[Task], dragging_id: str | None = None) -> None:
        """Set the tasks for this column.

        Args:
            tasks: Tasks in display order
            dragging_id: Id of the task being dragged, highlighted if present
        """
        self._tasks = tasks
        self._dragging_id = dragging_id
        self.call_after_refresh(self._refresh_tasks)

    async def _refresh_tasks(self) -> None:
        """Rebuild the task cards in this column."""
        content_id = f"#content-{self.column.value}"
        try:
            content = self.query_one(content_id, TaskListScroll)
        except Exception as e:
            self.log.error(f"Cannot find {content_id}: {e}")
            return

        await content.remove_children()

        if not self._tasks:
            await content.mount(EmptyColumnMessage(f"No {self.column.display_title.lower()} tasks"))
        else:
            await content.mount_all(
                TaskCard(
                    task,
                    dragging=task.id == self._dragging_id,
                    id=f"task-{_task_css_id(task.id)}",
                )
                for task in self._tasks
            )

        try:
            header = self.query_one(f"#header-{self.column.value}", Static)
            header.update(self._header_text)
        except Exception:
            pass

    @property
    def tasks(self) -> list[Task]:
        """Get the tasks in this column."""
        return self._tasks

    @property
    def task_count(self) -> int:
        return len(self._tasks)

    def focus_task(self, index: int) -> bool:
        """
        Focus the task at the given index.

        Returns:
            True if a task was focused, False otherwise
        """
        if not self._tasks or index < 0 or index >= len(self._tasks):
            return False

        css_id = _task_css_id(self._tasks[index].id)
        try:
            card = self.query_one(f"#task-{css_id}", TaskCard)
            card.focus()
            card.scroll_visible()
            return True
        except Exception:
            return False

    def get_task(self, index: int) -> Task | None:
        """Get task at index."""
        if 0 <= index < len(self._tasks):
            return self._tasks[index]
        return None
