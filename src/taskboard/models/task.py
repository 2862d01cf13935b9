"""Task domain model."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..utils import parse_timestamp


class Column(str, Enum):
    """A board column, which is also a task's status."""

    TODO = "todo"
    ACTIVE = "active"
    COMPLETED = "completed"

    @property
    def display_title(self) -> str:
        """Human readable column title."""
        return COLUMN_TITLES[self]

    @classmethod
    def ordered(cls) -> list[Column]:
        """Columns in board display order."""
        return [cls.TODO, cls.ACTIVE, cls.COMPLETED]

    @classmethod
    def parse(cls, value: str | Column) -> Column | None:
        """Return the column for a raw value, or None if it is not a column."""
        try:
            return cls(value)
        except ValueError:
            return None


COLUMN_TITLES: dict[Column, str] = {
    Column.TODO: "To Do",
    Column.ACTIVE: "Active",
    Column.COMPLETED: "Completed",
}


class Task(BaseModel):
    """A single unit of work on the board."""

    model_config = ConfigDict(populate_by_name=True)

    # Accepts "taskId" for documents written by older servers
    id: str = Field(validation_alias=AliasChoices("id", "taskId"))
    text: str
    column: Column = Column.TODO

    def to_wire(self) -> dict:
        """Convert to the JSON shape served by the API."""
        return {"id": self.id, "text": self.text, "column": self.column.value}


class StoredTask(Task):
    """Task as persisted by the server, with its creation time."""

    created: datetime | None = None

    def to_task(self) -> Task:
        """Drop storage-only fields."""
        return Task(id=self.id, text=self.text, column=self.column)

    def to_frontmatter(self) -> dict:
        """Convert to dict suitable for YAML front matter."""
        data: dict = {"id": self.id, "column": self.column.value}
        if self.created:
            data["created"] = self.created.isoformat()
        return data

    @classmethod
    def from_frontmatter(cls, metadata: dict, body: str) -> StoredTask:
        """Create a stored task from parsed front matter."""
        return cls(
            id=str(metadata["id"]),
            text=body,
            column=metadata.get("column", Column.TODO.value),
            created=parse_timestamp(metadata.get("created")),
        )


class TaskUpdate(BaseModel):
    """Partial update of a task; only fields that are set are applied."""

    text: str | None = None
    column: Column | None = None

    @property
    def is_empty(self) -> bool:
        return self.text is None and self.column is None

    def to_wire(self) -> dict:
        """Request body containing only the fields in scope."""
        return self.model_dump(mode="json", exclude_none=True)
