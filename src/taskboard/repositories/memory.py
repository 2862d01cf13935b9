"""In-memory repository for task storage."""

from __future__ import annotations

import threading

from ..models import Column, StoredTask, Task, TaskUpdate
from ..utils import now_utc
from .ids import new_task_id


class MemoryRepository:
    """Repository keeping tasks in a dict, in insertion order."""

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self._tasks: dict[str, StoredTask] = {}
        self._lock = threading.Lock()
        for task in tasks or []:
            self._tasks[task.id] = StoredTask(**task.model_dump(), created=now_utc())

    def list_all(self) -> list[Task]:
        with self._lock:
            return [task.to_task() for task in self._tasks.values()]

    def get(self, task_id: str) -> Task | None:
        with self._lock:
            stored = self._tasks.get(task_id)
        return stored.to_task() if stored else None

    def exists(self, task_id: str) -> bool:
        return task_id in self._tasks

    def create(self, text: str) -> Task:
        with self._lock:
            task_id = new_task_id(self.exists)
            stored = StoredTask(id=task_id, text=text, column=Column.TODO, created=now_utc())
            self._tasks[task_id] = stored
        return stored.to_task()

    def update(self, task_id: str, changes: TaskUpdate) -> Task | None:
        with self._lock:
            stored = self._tasks.get(task_id)
            if stored is None:
                return None
            stored = stored.model_copy(update=changes.model_dump(exclude_none=True))
            self._tasks[task_id] = stored
        return stored.to_task()

    def delete(self, task_id: str) -> bool:
        with self._lock:
            return self._tasks.pop(task_id, None) is not None
