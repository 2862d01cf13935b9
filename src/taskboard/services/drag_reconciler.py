"""Drag-and-drop reconciliation between the board view and the task API.

A drag gesture is modelled as a small state machine::

    Idle --drag_start--> Dragging --drag_over*--> Dragging --drop/cancel--> Idle

The transition functions are pure: they take the current state, a board and
an event, and return a ``Transition`` holding the next state, the next board
and the column change to persist (if any). ``DragReconciler`` applies them to
a ``BoardStore`` and performs the single persist call at drop.

Hover updates never reach the server. Only ``drop`` may produce a persist
request, and only when the task ends in a different column than the one it
was picked up from.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from ..models import Board, Column, Task
from .board_store import BoardStore

if TYPE_CHECKING:
    from ..client import TaskApiClient

logger = logging.getLogger(__name__)

Direction = Literal["up", "down", "left", "right"]


# --- Geometry and events ---


@dataclass(frozen=True)
class Rect:
    """Vertical extent of an element on screen."""

    top: float
    height: float

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2


@dataclass(frozen=True)
class OverTarget:
    """The element under the pointer: a task card or a column's drop surface."""

    task_id: str | None = None
    column: Column | None = None
    rect: Rect | None = None

    @classmethod
    def task(cls, task_id: str, rect: Rect | None = None) -> OverTarget:
        return cls(task_id=task_id, rect=rect)

    @classmethod
    def surface(cls, column: Column | str) -> OverTarget:
        return cls(column=Column(column))


@dataclass(frozen=True)
class DragEvent:
    """A hover-over or drop event for the dragged task.

    Attributes:
        active_id: Id of the dragged task
        over: What the pointer is over, or None for no valid target
        active_rect: Current (translated) rect of the dragged element
    """

    active_id: str
    over: OverTarget | None = None
    active_rect: Rect | None = None


@dataclass(frozen=True)
class Destination:
    """Resolved destination column and insertion index."""

    column: Column
    index: int


@dataclass(frozen=True)
class ColumnChange:
    """Column assignment to persist for a dropped task."""

    task_id: str
    column: Column


# --- States ---


@dataclass(frozen=True)
class Idle:
    """No drag in progress."""


@dataclass(frozen=True)
class Dragging:
    """A task is being dragged; origin is where it was picked up."""

    active_id: str
    origin_column: Column
    origin_index: int


DragState = Idle | Dragging

IDLE = Idle()


@dataclass(frozen=True)
class Transition:
    """Result of applying an event to a drag state."""

    state: DragState
    board: Board
    persist: ColumnChange | None = None
    changed: bool = False


# --- Destination resolution ---


def resolve_destination(
    board: Board,
    active_id: str,
    over: OverTarget | None,
    active_rect: Rect | None = None,
) -> Destination | None:
    """
    Work out where the dragged task would land.

    A column's drop surface means "end of that column". A task card means the
    card's column at the card's index, plus one when the dragged element's
    vertical center is below the card's center.

    Returns:
        The destination, or None when the target is not a valid drop location.
    """
    if over is None:
        return None

    if over.task_id is None:
        if over.column is None:
            return None
        return Destination(over.column, len(board.column(over.column)))

    position = board.find(over.task_id)
    if position is None:
        return None
    column, index = position

    if over.task_id == active_id:
        return Destination(column, index)

    below = (
        active_rect is not None
        and over.rect is not None
        and active_rect.center_y > over.rect.center_y
    )
    return Destination(column, index + 1 if below else index)


def place(board: Board, active_id: str, destination: Destination) -> tuple[Board, bool]:
    """
    Return a copy of the board with the task moved to the destination.

    Within a column the destination index is an insertion point in the
    sequence that still contains the task, so it is shifted down by one when
    the task currently sits before it.
    """
    position = board.find(active_id)
    if position is None:
        return board, False
    column, index = position

    store = BoardStore(board.model_copy(deep=True))
    if column == destination.column:
        settled = destination.index - 1 if index < destination.index else destination.index
        changed = store.reorder_within(column, index, settled)
    else:
        changed = store.move_between(column, destination.column, active_id, destination.index)

    if not changed:
        return board, False
    return store.board, True


def _restore(board: Board, dragging: Dragging) -> tuple[Board, bool]:
    """Put the dragged task back where the drag started."""
    position = board.find(dragging.active_id)
    if position is None:
        return board, False
    column, index = position

    store = BoardStore(board.model_copy(deep=True))
    if column == dragging.origin_column:
        changed = store.reorder_within(column, index, dragging.origin_index)
    else:
        changed = store.move_between(
            column, dragging.origin_column, dragging.active_id, dragging.origin_index
        )
    if not changed:
        return board, False
    return store.board, True


# --- Transitions ---


def drag_start(state: DragState, board: Board, active_id: str) -> Transition:
    """Idle -> Dragging, recording the task's origin."""
    if isinstance(state, Dragging):
        logger.debug("drag_start ignored, already dragging %s", state.active_id)
        return Transition(state, board)

    position = board.find(active_id)
    if position is None:
        logger.debug("drag_start ignored, unknown task: %s", active_id)
        return Transition(state, board)

    column, index = position
    return Transition(Dragging(active_id, column, index), board)


def drag_over(state: DragState, board: Board, event: DragEvent) -> Transition:
    """Dragging -> Dragging, moving the task to its provisional position."""
    if not isinstance(state, Dragging) or state.active_id != event.active_id:
        return Transition(state, board)

    destination = resolve_destination(board, event.active_id, event.over, event.active_rect)
    if destination is None:
        return Transition(state, board)

    new_board, changed = place(board, event.active_id, destination)
    return Transition(state, new_board, changed=changed)


def drop(state: DragState, board: Board, event: DragEvent) -> Transition:
    """
    Dragging -> Idle, settling the task and deciding what to persist.

    Without a valid destination the task returns to its origin.
    """
    if not isinstance(state, Dragging) or state.active_id != event.active_id:
        return Transition(state, board)

    destination = resolve_destination(board, event.active_id, event.over, event.active_rect)
    if destination is None:
        restored, changed = _restore(board, state)
        return Transition(IDLE, restored, changed=changed)

    new_board, changed = place(board, event.active_id, destination)

    persist = None
    if destination.column != state.origin_column:
        persist = ColumnChange(event.active_id, destination.column)
    return Transition(IDLE, new_board, persist=persist, changed=changed)


def drag_cancel(state: DragState, board: Board) -> Transition:
    """Dragging -> Idle, putting the task back where it started."""
    if not isinstance(state, Dragging):
        return Transition(state, board)
    restored, changed = _restore(board, state)
    return Transition(IDLE, restored, changed=changed)


# --- Keyboard sensor ---


def keyboard_over(board: Board, active_id: str, direction: Direction) -> DragEvent | None:
    """
    Build the hover event for moving the dragged task one step with the keyboard.

    Up/down target the neighbouring card in the same column; left/right target
    the card at the same index in the neighbouring column, or that column's
    drop surface when the index is past its end.

    Returns:
        The event, or None when the task cannot move in that direction.
    """
    position = board.find(active_id)
    if position is None:
        return None
    column, index = position
    tasks = board.column(column)

    if direction in ("up", "down"):
        neighbour = index - 1 if direction == "up" else index + 1
        if not 0 <= neighbour < len(tasks):
            return None
        over_rect = Rect(top=float(neighbour), height=1.0)
        offset = -0.5 if direction == "up" else 0.5
        return DragEvent(
            active_id,
            OverTarget.task(tasks[neighbour].id, over_rect),
            Rect(top=over_rect.top + offset, height=1.0),
        )

    columns = Column.ordered()
    neighbour_idx = columns.index(column) + (-1 if direction == "left" else 1)
    if not 0 <= neighbour_idx < len(columns):
        return None
    target_column = columns[neighbour_idx]
    target = board.column(target_column)

    if index >= len(target):
        return DragEvent(active_id, OverTarget.surface(target_column))

    over_rect = Rect(top=float(index), height=1.0)
    return DragEvent(
        active_id,
        OverTarget.task(target[index].id, over_rect),
        Rect(top=over_rect.top - 0.5, height=1.0),
    )


# --- Stateful reconciler ---


class DragReconciler:
    """Applies drag transitions to a board store and persists drops."""

    def __init__(self, store: BoardStore, api: TaskApiClient) -> None:
        self.store = store
        self.api = api
        self._state: DragState = IDLE

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def is_dragging(self) -> bool:
        return isinstance(self._state, Dragging)

    @property
    def active_id(self) -> str | None:
        if isinstance(self._state, Dragging):
            return self._state.active_id
        return None

    def _apply(self, transition: Transition) -> Transition:
        self._state = transition.state
        if transition.changed:
            self.store.replace(transition.board)
        return transition

    def start(self, task_id: str) -> bool:
        """Begin dragging a task. Returns True if a drag started."""
        transition = self._apply(drag_start(self._state, self.store.board, task_id))
        if isinstance(transition.state, Dragging):
            logger.debug(
                "Drag started: %s from %s[%d]",
                task_id,
                transition.state.origin_column.value,
                transition.state.origin_index,
            )
            return True
        return False

    def over(self, event: DragEvent) -> bool:
        """Apply a hover event optimistically. Returns True if the board changed."""
        return self._apply(drag_over(self._state, self.store.board, event)).changed

    def move(self, direction: Direction) -> bool:
        """Keyboard drag: move the dragged task one step."""
        active_id = self.active_id
        if active_id is None:
            return False
        event = keyboard_over(self.store.board, active_id, direction)
        if event is None:
            return False
        return self.over(event)

    def drop(self, event: DragEvent) -> Task | None:
        """
        Finish the drag.

        The local board is settled first; then, if the task changed column,
        one update is sent. A failed update is not rolled back.

        Returns:
            The server's copy of the task if a column change was persisted.

        Raises:
            UpdateError: The column change could not be persisted
        """
        transition = self._apply(drop(self._state, self.store.board, event))
        if transition.persist is None:
            logger.debug("Drop without column change: %s", event.active_id)
            return None

        change = transition.persist
        logger.info("Persisting column change: %s -> %s", change.task_id, change.column.value)
        return self.api.update(change.task_id, column=change.column)

    def drop_here(self) -> Task | None:
        """Keyboard drop: drop the task where it currently sits."""
        active_id = self.active_id
        if active_id is None:
            return None
        return self.drop(DragEvent(active_id, OverTarget.task(active_id)))

    def cancel(self) -> bool:
        """Abort the drag and restore the origin position."""
        was_dragging = self.is_dragging
        self._apply(drag_cancel(self._state, self.store.board))
        if was_dragging:
            logger.debug("Drag cancelled")
        return was_dragging
