"""Errors raised by the task API client."""

from __future__ import annotations


class TaskApiError(Exception):
    """Base exception for task API errors.

    Attributes:
        status_code: HTTP status of a non-success response, or None when the
            request never completed (transport failure).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LoadError(TaskApiError):
    """Loading the board failed."""

    pass


class FetchError(LoadError):
    """Fetching all tasks failed."""

    pass


class CreateError(TaskApiError):
    """Creating a task failed."""

    pass


class UpdateError(TaskApiError):
    """Updating a task failed."""

    pass


class DeleteError(TaskApiError):
    """Deleting a task failed."""

    pass


class TaskNotFoundError(TaskApiError):
    """The task does not exist on the server."""

    pass


class UpdateNotFoundError(UpdateError, TaskNotFoundError):
    """Update targeted a task that does not exist."""

    pass


class DeleteNotFoundError(DeleteError, TaskNotFoundError):
    """Delete targeted a task that does not exist."""

    pass
