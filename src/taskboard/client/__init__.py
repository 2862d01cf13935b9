"""Client for the task API."""

from .api import DEFAULT_API_URL, TaskApiClient
from .errors import (
    CreateError,
    DeleteError,
    DeleteNotFoundError,
    FetchError,
    LoadError,
    TaskApiError,
    TaskNotFoundError,
    UpdateError,
    UpdateNotFoundError,
)

__all__ = [
    "DEFAULT_API_URL",
    "CreateError",
    "DeleteError",
    "DeleteNotFoundError",
    "FetchError",
    "LoadError",
    "TaskApiClient",
    "TaskApiError",
    "TaskNotFoundError",
    "UpdateError",
    "UpdateNotFoundError",
]
