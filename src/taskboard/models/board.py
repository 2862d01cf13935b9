"""Board state models."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from .task import Column, Task


class Board(BaseModel):
    """Tasks partitioned into the three columns, each in display order."""

    todo: list[Task] = Field(default_factory=list)
    active: list[Task] = Field(default_factory=list)
    completed: list[Task] = Field(default_factory=list)

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task]) -> Board:
        """Group tasks by column, keeping their relative order."""
        board = cls()
        for task in tasks:
            board.column(task.column).append(task)
        return board

    def column(self, column: Column | str) -> list[Task]:
        """Get the (mutable) sequence for a column."""
        return getattr(self, Column(column).value)

    def find(self, task_id: str) -> tuple[Column, int] | None:
        """Locate a task by id, returning its column and index."""
        for column in Column.ordered():
            for index, task in enumerate(self.column(column)):
                if task.id == task_id:
                    return column, index
        return None

    def get(self, task_id: str) -> Task | None:
        """Get a task by id from any column."""
        position = self.find(task_id)
        if position is None:
            return None
        column, index = position
        return self.column(column)[index]

    def ids(self, column: Column | str) -> list[str]:
        """Task ids of a column in order."""
        return [task.id for task in self.column(column)]

    def all_ids(self) -> list[str]:
        """Every task id on the board, column by column."""
        return [task.id for column in Column.ordered() for task in self.column(column)]

    def get_visible_columns(self) -> list[tuple[Column, str, list[Task]]]:
        """
        Get columns with their titles.

        Returns:
            List of (column, title, tasks) tuples in display order.
        """
        return [(col, col.display_title, self.column(col)) for col in Column.ordered()]

    def to_wire(self) -> dict:
        """Convert to the grouping served by GET /api/tasks."""
        return {col.value: [task.to_wire() for task in self.column(col)] for col in Column.ordered()}
