"""Service coordinating the board state with the task API."""

from __future__ import annotations

import logging

from ..client import (
    CreateError,
    DeleteError,
    LoadError,
    TaskApiClient,
    UpdateError,
)
from ..models import Board, Column, Task
from .board_store import BoardStore
from .drag_reconciler import DragEvent, DragReconciler, Direction

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load tasks. Please try again."
CREATE_FAILED = "Failed to create task. Please try again."
UPDATE_FAILED = "Failed to update task. Please try again."
DELETE_FAILED = "Failed to delete task. Please try again."
MOVE_FAILED = "Failed to move task. Please try again."


class BoardService:
    """
    Board operations as seen by the UI.

    Each operation calls the API and, on success, updates the store. Failures
    are logged and turned into a single banner message (``error``); they are
    never retried or re-raised, and the store is left as it was (drops keep
    their optimistic placement).
    """

    def __init__(self, api: TaskApiClient, store: BoardStore | None = None) -> None:
        self.api = api
        self.store = store or BoardStore()
        self.reconciler = DragReconciler(self.store, api)
        self._error: str | None = None
        self._loading = False

    @property
    def board(self) -> Board:
        return self.store.board

    @property
    def error(self) -> str | None:
        """Banner message for the last failed action, if any."""
        return self._error

    @property
    def loading(self) -> bool:
        return self._loading

    def dismiss_error(self) -> None:
        self._error = None

    def _fail(self, message: str, error: Exception) -> None:
        logger.error("%s (%s)", message, error)
        self._error = message

    # --- Task operations ---

    def load_tasks(self) -> bool:
        """Fetch all tasks and replace the board. Keeps the old board on failure."""
        self._loading = True
        self._error = None
        try:
            snapshot = self.api.fetch_all()
        except LoadError as e:
            self._fail(LOAD_FAILED, e)
            return False
        finally:
            self._loading = False

        self.reconciler.cancel()
        self.store.load(snapshot)
        return True

    def add_task(self, text: str) -> Task | None:
        """Create a task and append it to To Do. Blank text is ignored."""
        text = text.strip()
        if not text:
            return None

        try:
            task = self.api.create(text)
        except CreateError as e:
            self._fail(CREATE_FAILED, e)
            return None

        self.store.append(Column.TODO, task)
        logger.info("Task created: %s", task.id)
        return task

    def save_edit(self, column: Column | str, task_id: str, text: str) -> bool:
        """Change a task's text. Blank text is ignored."""
        text = text.strip()
        if not text:
            return False

        try:
            self.api.update(task_id, text=text)
        except UpdateError as e:
            self._fail(UPDATE_FAILED, e)
            return False

        self.store.rename(column, task_id, text)
        logger.info("Task updated: %s", task_id)
        return True

    def delete_task(self, column: Column | str, task_id: str) -> bool:
        """Delete a task from the server, then from its column."""
        try:
            self.api.delete(task_id)
        except DeleteError as e:
            self._fail(DELETE_FAILED, e)
            return False

        self.store.remove(column, task_id)
        logger.info("Task deleted: %s", task_id)
        return True

    # --- Drag operations ---

    @property
    def dragging_id(self) -> str | None:
        return self.reconciler.active_id

    def drag_start(self, task_id: str) -> bool:
        return self.reconciler.start(task_id)

    def drag_over(self, event: DragEvent) -> bool:
        return self.reconciler.over(event)

    def drag_move(self, direction: Direction) -> bool:
        return self.reconciler.move(direction)

    def drop(self, event: DragEvent | None = None) -> bool:
        """
        Finish the current drag.

        Args:
            event: Drop event; None drops the task where it currently sits.

        Returns:
            False if persisting the column change failed.
        """
        try:
            if event is None:
                self.reconciler.drop_here()
            else:
                self.reconciler.drop(event)
        except UpdateError as e:
            self._fail(MOVE_FAILED, e)
            return False
        return True

    def drag_cancel(self) -> bool:
        return self.reconciler.cancel()
