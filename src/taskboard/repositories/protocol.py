"""Repository protocol for task document stores."""

from typing import Protocol

from ..models import Task, TaskUpdate


class TaskRepositoryProtocol(Protocol):
    """Interface for task document stores.

    Implementations include:
    - Filesystem (markdown documents with YAML front matter)
    - In-memory (tests and throwaway servers)
    - MongoDB

    Stores keep column membership only; they never persist ordering within a
    column. ``list_all`` returns tasks in insertion order.

    Backend failures raise ``StoreError``.
    """

    def list_all(self) -> list[Task]:
        """Load all tasks.

        Returns:
            Every stored task, oldest first.
        """
        ...

    def get(self, task_id: str) -> Task | None:
        """Get a single task by ID.

        Returns:
            The task if found, None otherwise.
        """
        ...

    def exists(self, task_id: str) -> bool:
        """Check whether a task ID is taken."""
        ...

    def create(self, text: str) -> Task:
        """Store a new task in the todo column.

        Args:
            text: Task description

        Returns:
            The stored task with its assigned ID.
        """
        ...

    def update(self, task_id: str, changes: TaskUpdate) -> Task | None:
        """Apply a partial update.

        Returns:
            The updated task, or None if the task does not exist.
        """
        ...

    def delete(self, task_id: str) -> bool:
        """Delete a task by ID.

        Returns:
            False if the task does not exist.
        """
        ...
