"""Task card widget."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import Static

from ...models import Task


class TaskCard(Widget, can_focus=True):
    """A task card displayed in a column."""

    MAX_TEXT = 120

    def __init__(
        self,
        task_data: Task,
        dragging: bool = False,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._task_data = task_data
        if dragging:
            self.add_class("-dragging")

    @property
    def task(self) -> Task:  # pyrefly: ignore[bad-override]
        """Get the task for this card."""
        return self._task_data

    @property
    def dragging(self) -> bool:
        return self.has_class("-dragging")

    def compose(self) -> ComposeResult:
        grip = ("≡", "bold") if self.dragging else ("⋮", "dim")
        text = Text.assemble(grip, " ", self._truncate(self._task_data.text))
        yield Static(text, classes="task-text")

    def _truncate(self, text: str) -> str:
        """Truncate text with ellipsis."""
        if len(text) <= self.MAX_TEXT:
            return text
        return text[: self.MAX_TEXT - 1] + "…"
