"""Filesystem-based repository for task storage."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

import frontmatter

from ..models import Column, StoredTask, Task, TaskUpdate
from ..utils import now_utc
from .errors import StoreError
from .ids import new_task_id

logger = logging.getLogger(__name__)


class FilesystemRepository:
    """
    Repository for task documents stored on the filesystem.

    Each task is a ``<id>.md`` file: YAML front matter holds the id, column
    and creation time; the body is the task text. Files are listed oldest
    first by their ``created`` field.
    """

    SUFFIX = ".md"

    def __init__(self, task_root: Path) -> None:
        """
        Initialize repository.

        Args:
            task_root: Path to the tasks directory (e.g., .taskboard/)
        """
        self.task_root = task_root
        self._lock = threading.Lock()

    def ensure_directory(self) -> None:
        """Create the tasks directory if it doesn't exist."""
        try:
            self.task_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"Cannot create task directory: {e}") from e

    # --- Task Operations ---

    def list_all(self) -> list[Task]:
        """Load and return all tasks from the filesystem."""
        if not self.task_root.exists():
            return []

        stored = [task for task in map(self._parse_task_file, self._iter_task_files()) if task]
        stored.sort(key=_sort_key)
        return [task.to_task() for task in stored]

    def get(self, task_id: str) -> Task | None:
        stored = self._load(task_id)
        return stored.to_task() if stored else None

    def exists(self, task_id: str) -> bool:
        return self.get_filepath(task_id).exists()

    def get_filepath(self, task_id: str) -> Path:
        """Get the filesystem path for a task ID."""
        return self.task_root / f"{task_id}{self.SUFFIX}"

    def create(self, text: str) -> Task:
        """Write a new task document in the todo column."""
        with self._lock:
            self.ensure_directory()
            task_id = new_task_id(self.exists)
            stored = StoredTask(id=task_id, text=text, column=Column.TODO, created=now_utc())
            self._write(stored)
        logger.info("Task stored: %s", task_id)
        return stored.to_task()

    def update(self, task_id: str, changes: TaskUpdate) -> Task | None:
        """Rewrite a task document with the changed fields."""
        with self._lock:
            stored = self._load(task_id)
            if stored is None:
                return None
            stored = stored.model_copy(update=changes.model_dump(exclude_none=True))
            self._write(stored)
        return stored.to_task()

    def delete(self, task_id: str) -> bool:
        """Delete a task file from the filesystem."""
        filepath = self.get_filepath(task_id)
        with self._lock:
            if not filepath.exists():
                return False
            try:
                filepath.unlink()
            except OSError as e:
                raise StoreError(f"Cannot delete {filepath.name}: {e}") from e
        return True

    # --- Private Methods ---

    def _iter_task_files(self) -> Iterator[Path]:
        """Iterate over all .md files in the task root."""
        yield from self.task_root.glob(f"*{self.SUFFIX}")

    def _load(self, task_id: str) -> StoredTask | None:
        filepath = self.get_filepath(task_id)
        if not filepath.exists():
            return None
        return self._parse_task_file(filepath)

    def _parse_task_file(self, filepath: Path) -> StoredTask | None:
        """Parse a single task file; unreadable files are skipped."""
        try:
            post = frontmatter.load(filepath)
            metadata = dict(post.metadata)
            metadata.setdefault("id", filepath.stem)
            return StoredTask.from_frontmatter(metadata, post.content)
        except Exception as e:
            logger.warning("Skipping unreadable task file %s: %s", filepath.name, e)
            return None

    def _write(self, task: StoredTask) -> None:
        post = frontmatter.Post(task.text)
        post.metadata = task.to_frontmatter()
        try:
            with self.get_filepath(task.id).open("w") as f:
                f.write(frontmatter.dumps(post, sort_keys=False))
        except OSError as e:
            raise StoreError(f"Cannot write task {task.id}: {e}") from e


_EPOCH = datetime.min.replace(tzinfo=UTC)


def _sort_key(task: StoredTask) -> tuple[datetime, str]:
    created = task.created or _EPOCH
    if created.tzinfo is None:
        created = created.replace(tzinfo=UTC)
    return (created, task.id)
