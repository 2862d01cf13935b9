"""In-memory board state owned by the client."""

from __future__ import annotations

import logging

from ..models import Board, Column, Task

logger = logging.getLogger(__name__)


class BoardStore:
    """
    Single-writer holder of the three column sequences.

    Every operation is synchronous and only mutates memory. Unknown ids and
    out of range indices are no-ops, so a task id is never duplicated or lost.
    """

    def __init__(self, board: Board | None = None) -> None:
        self._board = board if board is not None else Board()

    @property
    def board(self) -> Board:
        """The live board (do not mutate outside the store)."""
        return self._board

    def snapshot(self) -> Board:
        """Deep copy of the current board."""
        return self._board.model_copy(deep=True)

    def replace(self, board: Board) -> None:
        """Install a board computed elsewhere (e.g. by a drag transition)."""
        self._board = board

    def load(self, snapshot: Board) -> None:
        """Replace all three sequences wholesale from a server grouping."""
        board = Board()
        for column in Column.ordered():
            for task in snapshot.column(column):
                # Trust the grouping over the task's own field
                board.column(column).append(task.model_copy(update={"column": column}))
        self._board = board
        logger.debug(
            "Board loaded: todo=%d active=%d completed=%d",
            len(board.todo),
            len(board.active),
            len(board.completed),
        )

    def clear(self) -> None:
        self._board = Board()

    # --- Queries ---

    def tasks(self, column: Column | str) -> list[Task]:
        """Copy of a column's sequence."""
        return list(self._board.column(column))

    def count(self, column: Column | str) -> int:
        return len(self._board.column(column))

    def find(self, task_id: str) -> tuple[Column, int] | None:
        return self._board.find(task_id)

    def get(self, task_id: str) -> Task | None:
        return self._board.get(task_id)

    # --- Mutations ---

    def append(self, column: Column | str, task: Task) -> None:
        """Insert a task at the end of a column."""
        column = Column(column)
        if self._board.find(task.id) is not None:
            logger.debug("append: task already on board, moving: %s", task.id)
            self.remove_everywhere(task.id)
        self._board.column(column).append(task.model_copy(update={"column": column}))

    def remove(self, column: Column | str, task_id: str) -> None:
        """Remove a task from a column; no-op if absent."""
        tasks = self._board.column(column)
        for index, task in enumerate(tasks):
            if task.id == task_id:
                del tasks[index]
                return
        logger.debug("remove: task not in %s: %s", Column(column).value, task_id)

    def remove_everywhere(self, task_id: str) -> None:
        """Remove a task from whichever column holds it."""
        position = self._board.find(task_id)
        if position is not None:
            column, index = position
            del self._board.column(column)[index]

    def rename(self, column: Column | str, task_id: str, text: str) -> None:
        """Replace a task's text without changing its position."""
        tasks = self._board.column(column)
        for index, task in enumerate(tasks):
            if task.id == task_id:
                tasks[index] = task.model_copy(update={"text": text})
                return
        logger.debug("rename: task not in %s: %s", Column(column).value, task_id)

    def move_between(
        self,
        from_column: Column | str,
        to_column: Column | str,
        task_id: str,
        to_index: int,
    ) -> bool:
        """
        Move a task from one column to a position in another.

        The index is clamped to ``[0, len(to_column)]`` after removal and the
        task's recorded column becomes ``to_column``.

        Returns:
            True if the board changed
        """
        from_column = Column(from_column)
        to_column = Column(to_column)
        source = self._board.column(from_column)

        from_index = next((i for i, t in enumerate(source) if t.id == task_id), None)
        if from_index is None:
            logger.debug("move_between: task not in %s: %s", from_column.value, task_id)
            return False

        task = source.pop(from_index)
        target = self._board.column(to_column)
        index = max(0, min(to_index, len(target)))

        if from_column == to_column and index == from_index:
            source.insert(from_index, task)
            return False

        target.insert(index, task.model_copy(update={"column": to_column}))
        logger.debug(
            "Task moved: %s (%s[%d] -> %s[%d])",
            task_id,
            from_column.value,
            from_index,
            to_column.value,
            index,
        )
        return True

    def reorder_within(self, column: Column | str, from_index: int, to_index: int) -> bool:
        """
        Move an element within one column (array move).

        Returns:
            True if the board changed
        """
        tasks = self._board.column(column)
        if not 0 <= from_index < len(tasks):
            logger.debug("reorder_within: index out of range: %d", from_index)
            return False

        to_index = max(0, min(to_index, len(tasks) - 1))
        if to_index == from_index:
            return False

        tasks.insert(to_index, tasks.pop(from_index))
        logger.debug(
            "Task reordered in %s: pos %d -> %d", Column(column).value, from_index, to_index
        )
        return True
