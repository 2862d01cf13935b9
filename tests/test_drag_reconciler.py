"""Tests for drag-and-drop reconciliation."""

from unittest.mock import MagicMock

import pytest

from taskboard.client import UpdateError
from taskboard.models import Board, Column, Task
from taskboard.services import BoardStore, DragEvent, DragReconciler, OverTarget, Rect
from taskboard.services.drag_reconciler import (
    IDLE,
    Destination,
    Dragging,
    drag_cancel,
    drag_over,
    drag_start,
    drop,
    keyboard_over,
    resolve_destination,
)


def make_board(todo=(), active=(), completed=()) -> Board:
    return Board(
        todo=[Task(id=i, text=i, column=Column.TODO) for i in todo],
        active=[Task(id=i, text=i, column=Column.ACTIVE) for i in active],
        completed=[Task(id=i, text=i, column=Column.COMPLETED) for i in completed],
    )


def over_card(task_id: str, top: float) -> OverTarget:
    """A card occupying one row at the given top."""
    return OverTarget.task(task_id, Rect(top=top, height=1.0))


def rect_at(top: float) -> Rect:
    return Rect(top=top, height=1.0)


@pytest.fixture
def api() -> MagicMock:
    mock = MagicMock()
    mock.update.side_effect = lambda task_id, column=None, text=None: Task(
        id=task_id, text=task_id, column=column
    )
    return mock


@pytest.fixture
def store() -> BoardStore:
    return BoardStore(make_board(todo=["a", "b", "c"], active=["d"]))


@pytest.fixture
def reconciler(store: BoardStore, api: MagicMock) -> DragReconciler:
    return DragReconciler(store, api)


class TestResolveDestination:
    """Tests for destination resolution."""

    def test_surface_means_end_of_column(self):
        board = make_board(active=["d", "e"])
        dest = resolve_destination(board, "a", OverTarget.surface(Column.ACTIVE))
        assert dest == Destination(Column.ACTIVE, 2)

    def test_no_target(self):
        assert resolve_destination(make_board(todo=["a"]), "a", None) is None

    def test_empty_target(self):
        assert resolve_destination(make_board(todo=["a"]), "a", OverTarget()) is None

    def test_unknown_card(self):
        board = make_board(todo=["a"])
        assert resolve_destination(board, "a", over_card("missing", 0)) is None

    def test_above_hovered_center_takes_its_index(self):
        board = make_board(todo=["a", "b"])
        dest = resolve_destination(board, "x", over_card("b", 1), rect_at(0.6))
        assert dest == Destination(Column.TODO, 1)

    def test_below_hovered_center_takes_next_index(self):
        board = make_board(todo=["a", "b"])
        dest = resolve_destination(board, "x", over_card("b", 1), rect_at(1.4))
        assert dest == Destination(Column.TODO, 2)

    def test_equal_centers_count_as_above(self):
        board = make_board(todo=["a", "b"])
        dest = resolve_destination(board, "x", over_card("b", 1), rect_at(1))
        assert dest == Destination(Column.TODO, 1)

    def test_missing_rects_count_as_above(self):
        board = make_board(todo=["a", "b"])
        dest = resolve_destination(board, "x", OverTarget.task("b"))
        assert dest == Destination(Column.TODO, 1)

    def test_over_itself_is_current_position(self):
        board = make_board(todo=["a", "b"])
        dest = resolve_destination(board, "b", over_card("b", 1), rect_at(5))
        assert dest == Destination(Column.TODO, 1)


class TestTransitions:
    """Tests for the pure transition functions."""

    def test_drag_start_records_origin(self):
        board = make_board(todo=["a", "b"])
        transition = drag_start(IDLE, board, "b")
        assert transition.state == Dragging("b", Column.TODO, 1)
        assert transition.board is board

    def test_drag_start_unknown_task_stays_idle(self):
        transition = drag_start(IDLE, make_board(todo=["a"]), "zzz")
        assert transition.state is IDLE

    def test_drag_start_while_dragging_is_ignored(self):
        state = Dragging("a", Column.TODO, 0)
        transition = drag_start(state, make_board(todo=["a", "b"]), "b")
        assert transition.state is state

    def test_drag_over_when_idle_is_ignored(self):
        board = make_board(todo=["a"])
        transition = drag_over(IDLE, board, DragEvent("a", OverTarget.surface(Column.ACTIVE)))
        assert transition.board is board
        assert not transition.changed

    def test_drag_over_for_other_task_is_ignored(self):
        board = make_board(todo=["a", "b"])
        state = Dragging("a", Column.TODO, 0)
        transition = drag_over(state, board, DragEvent("b", OverTarget.surface(Column.ACTIVE)))
        assert not transition.changed

    def test_drag_over_does_not_mutate_input_board(self):
        board = make_board(todo=["a", "b"])
        state = Dragging("a", Column.TODO, 0)
        transition = drag_over(state, board, DragEvent("a", OverTarget.surface(Column.ACTIVE)))
        assert board.ids(Column.TODO) == ["a", "b"]
        assert transition.board.ids(Column.ACTIVE) == ["a"]

    def test_drop_into_new_column_requests_persist(self):
        board = make_board(active=["a"])
        state = Dragging("a", Column.TODO, 0)
        transition = drop(state, board, DragEvent("a", OverTarget.surface(Column.ACTIVE)))
        assert transition.state is IDLE
        assert transition.persist is not None
        assert transition.persist.column == Column.ACTIVE

    def test_drop_back_in_origin_column_has_no_persist(self):
        board = make_board(todo=["b", "a"])
        state = Dragging("a", Column.TODO, 0)
        transition = drop(state, board, DragEvent("a", over_card("a", 1)))
        assert transition.persist is None

    def test_cancel_restores_origin(self):
        board = make_board(todo=["b"], completed=["a"])
        state = Dragging("a", Column.TODO, 0)
        transition = drag_cancel(state, board)
        assert transition.state is IDLE
        assert transition.board.ids(Column.TODO) == ["a", "b"]
        assert transition.board.get("a").column == Column.TODO


class TestDragWithinColumn:
    """Reordering inside one column."""

    def test_drag_up_above_first(self, reconciler: DragReconciler, store: BoardStore):
        reconciler.start("c")
        reconciler.over(DragEvent("c", over_card("a", 0), rect_at(-0.2)))
        assert store.board.ids(Column.TODO) == ["c", "a", "b"]

    def test_drag_down_below_last(self, reconciler: DragReconciler, store: BoardStore):
        reconciler.start("a")
        reconciler.over(DragEvent("a", over_card("c", 2), rect_at(2.3)))
        assert store.board.ids(Column.TODO) == ["b", "c", "a"]

    def test_drag_down_one_place(self, reconciler: DragReconciler, store: BoardStore):
        reconciler.start("a")
        reconciler.over(DragEvent("a", over_card("b", 1), rect_at(1.2)))
        assert store.board.ids(Column.TODO) == ["b", "a", "c"]

    def test_drop_in_same_column_sends_nothing(
        self, reconciler: DragReconciler, store: BoardStore, api: MagicMock
    ):
        reconciler.start("a")
        reconciler.over(DragEvent("a", over_card("c", 2), rect_at(2.3)))
        result = reconciler.drop(DragEvent("a", over_card("a", 2)))

        assert result is None
        api.update.assert_not_called()
        assert store.board.ids(Column.TODO) == ["b", "c", "a"]
        assert not reconciler.is_dragging

    def test_drop_on_own_column_surface_moves_to_end(
        self, reconciler: DragReconciler, store: BoardStore, api: MagicMock
    ):
        reconciler.start("a")
        reconciler.drop(DragEvent("a", OverTarget.surface(Column.TODO)))
        assert store.board.ids(Column.TODO) == ["b", "c", "a"]
        api.update.assert_not_called()


class TestDragAcrossColumns:
    """Moving tasks between columns."""

    def test_drag_to_empty_column_persists_once(
        self, reconciler: DragReconciler, store: BoardStore, api: MagicMock
    ):
        reconciler.start("b")
        reconciler.over(DragEvent("b", OverTarget.surface(Column.COMPLETED)))
        reconciler.over(DragEvent("b", OverTarget.surface(Column.COMPLETED)))
        api.update.assert_not_called()

        result = reconciler.drop(DragEvent("b", OverTarget.surface(Column.COMPLETED)))

        api.update.assert_called_once_with("b", column=Column.COMPLETED)
        assert result.column == Column.COMPLETED
        assert store.board.ids(Column.TODO) == ["a", "c"]
        assert store.board.ids(Column.COMPLETED) == ["b"]
        assert store.get("b").column == Column.COMPLETED

    def test_hover_sequence_then_drop_persists_final_column_only(
        self, reconciler: DragReconciler, store: BoardStore, api: MagicMock
    ):
        reconciler.start("a")
        reconciler.over(DragEvent("a", OverTarget.surface(Column.ACTIVE)))
        reconciler.over(DragEvent("a", OverTarget.surface(Column.COMPLETED)))
        reconciler.drop(DragEvent("a", OverTarget.surface(Column.COMPLETED)))

        api.update.assert_called_once_with("a", column=Column.COMPLETED)

    def test_dragging_away_and_back_sends_nothing(
        self, reconciler: DragReconciler, store: BoardStore, api: MagicMock
    ):
        reconciler.start("a")
        reconciler.over(DragEvent("a", OverTarget.surface(Column.ACTIVE)))
        reconciler.over(DragEvent("a", over_card("b", 0), rect_at(-0.4)))
        reconciler.drop(DragEvent("a", over_card("a", 0)))

        api.update.assert_not_called()
        assert store.board.ids(Column.TODO) == ["a", "b", "c"]

    def test_hover_above_card_in_other_column(
        self, reconciler: DragReconciler, store: BoardStore
    ):
        reconciler.start("c")
        reconciler.over(DragEvent("c", over_card("d", 0), rect_at(-0.3)))
        assert store.board.ids(Column.ACTIVE) == ["c", "d"]
        assert store.get("c").column == Column.ACTIVE

    def test_update_failure_keeps_optimistic_state(
        self, reconciler: DragReconciler, store: BoardStore, api: MagicMock
    ):
        api.update.side_effect = UpdateError("HTTP 500: boom", status_code=500)

        reconciler.start("a")
        with pytest.raises(UpdateError):
            reconciler.drop(DragEvent("a", OverTarget.surface(Column.ACTIVE)))

        assert store.board.ids(Column.ACTIVE) == ["d", "a"]
        assert not reconciler.is_dragging


class TestDropWithoutTarget:
    """Drops outside any target and cancellation."""

    def test_drop_without_target_restores_origin(
        self, reconciler: DragReconciler, store: BoardStore, api: MagicMock
    ):
        reconciler.start("b")
        reconciler.over(DragEvent("b", OverTarget.surface(Column.ACTIVE)))
        reconciler.drop(DragEvent("b", None))

        assert store.board.ids(Column.TODO) == ["a", "b", "c"]
        assert store.board.ids(Column.ACTIVE) == ["d"]
        api.update.assert_not_called()

    def test_cancel_restores_origin(self, reconciler: DragReconciler, store: BoardStore):
        reconciler.start("a")
        reconciler.over(DragEvent("a", over_card("c", 2), rect_at(2.5)))

        assert reconciler.cancel() is True
        assert store.board.ids(Column.TODO) == ["a", "b", "c"]
        assert reconciler.state is IDLE

    def test_cancel_when_idle(self, reconciler: DragReconciler):
        assert reconciler.cancel() is False

    def test_drop_when_idle_is_ignored(
        self, reconciler: DragReconciler, store: BoardStore, api: MagicMock
    ):
        assert reconciler.drop(DragEvent("a", OverTarget.surface(Column.ACTIVE))) is None
        assert store.board.ids(Column.TODO) == ["a", "b", "c"]
        api.update.assert_not_called()


class TestKeyboardSensor:
    """Keyboard moves synthesize hover events."""

    def test_move_down(self, reconciler: DragReconciler, store: BoardStore):
        reconciler.start("a")
        assert reconciler.move("down")
        assert store.board.ids(Column.TODO) == ["b", "a", "c"]

    def test_move_up(self, reconciler: DragReconciler, store: BoardStore):
        reconciler.start("c")
        assert reconciler.move("up")
        assert store.board.ids(Column.TODO) == ["a", "c", "b"]

    def test_move_up_at_top_does_nothing(self, reconciler: DragReconciler, store: BoardStore):
        reconciler.start("a")
        assert reconciler.move("up") is False
        assert store.board.ids(Column.TODO) == ["a", "b", "c"]

    def test_move_right_takes_same_index(self, reconciler: DragReconciler, store: BoardStore):
        reconciler.start("a")
        assert reconciler.move("right")
        assert store.board.ids(Column.ACTIVE) == ["a", "d"]

    def test_move_right_past_end_goes_to_surface(
        self, reconciler: DragReconciler, store: BoardStore
    ):
        reconciler.start("c")
        reconciler.move("right")
        assert store.board.ids(Column.ACTIVE) == ["d", "c"]
        reconciler.move("right")
        assert store.board.ids(Column.COMPLETED) == ["c"]

    def test_move_left_from_first_column(self, reconciler: DragReconciler):
        reconciler.start("a")
        assert reconciler.move("left") is False

    def test_move_when_idle(self, reconciler: DragReconciler):
        assert reconciler.move("down") is False

    def test_drop_here_persists_column_change(
        self, reconciler: DragReconciler, store: BoardStore, api: MagicMock
    ):
        reconciler.start("b")
        reconciler.move("right")
        reconciler.drop_here()

        api.update.assert_called_once_with("b", column=Column.ACTIVE)
        assert store.find("b") == (Column.ACTIVE, 1)

    def test_keyboard_over_unknown_task(self):
        assert keyboard_over(make_board(todo=["a"]), "zzz", "down") is None
