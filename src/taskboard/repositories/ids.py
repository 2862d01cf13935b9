"""Task id generation."""

from collections.abc import Callable
from datetime import datetime

from ..utils import now_utc, unix_millis


def new_task_id(exists: Callable[[str], bool], now: datetime | None = None) -> str:
    """
    Generate a task id of the form ``task-<unix millis>``.

    Appends ``-1``, ``-2``, ... while the candidate is already taken.
    """
    now = now or now_utc()
    base = f"task-{unix_millis(now)}"
    candidate = base
    counter = 1

    while exists(candidate):
        candidate = f"{base}-{counter}"
        counter += 1

    return candidate
