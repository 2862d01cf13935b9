"""Data models."""

from .board import Board
from .task import COLUMN_TITLES, Column, StoredTask, Task, TaskUpdate

__all__ = [
    "COLUMN_TITLES",
    "Board",
    "Column",
    "StoredTask",
    "Task",
    "TaskUpdate",
]
