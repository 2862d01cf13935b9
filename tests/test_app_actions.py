"""Tests for app action handlers.

The app is built with ``__new__`` so no terminal is needed; the board screen
and services are mocks.
"""

from unittest.mock import MagicMock, PropertyMock, patch

import pytest
from textual.screen import ModalScreen

from taskboard.app import TaskboardApp
from taskboard.models import Column, Task
from taskboard.ui.screens.board import BoardScreen
from taskboard.ui.widgets import ConfirmModal, TaskInputModal


@pytest.fixture
def app() -> TaskboardApp:
    app = TaskboardApp.__new__(TaskboardApp)
    app.notify = MagicMock()
    app.push_screen = MagicMock()
    app.board_service = MagicMock()
    return app


@pytest.fixture
def board_screen() -> MagicMock:
    screen = MagicMock(spec=BoardScreen)
    screen.is_dragging = False
    screen.current_column = Column.ACTIVE
    screen.get_current_task.return_value = Task(id="task-1", text="Old text", column=Column.ACTIVE)
    return screen


def on_screen(screen):
    return patch.object(TaskboardApp, "screen", new_callable=PropertyMock, return_value=screen)


def pushed_callback(app: TaskboardApp):
    """Callback passed with the last pushed modal."""
    return app.push_screen.call_args.kwargs["callback"]


class TestActionNewTask:
    """Tests for creating tasks from the board."""

    def test_creates_task_and_notifies(self, app, board_screen):
        app.board_service.add_task.return_value = Task(id="task-9", text="Buy milk")

        with on_screen(board_screen):
            app.action_new_task()
            assert isinstance(app.push_screen.call_args.args[0], TaskInputModal)
            pushed_callback(app)("Buy milk")

        app.board_service.add_task.assert_called_once_with("Buy milk")
        board_screen.refresh_board.assert_called_once_with(focus_task_id="task-9")
        app.notify.assert_called_once_with("Task created", timeout=2)

    def test_cancelled_modal_creates_nothing(self, app, board_screen):
        with on_screen(board_screen):
            app.action_new_task()
            pushed_callback(app)(None)

        app.board_service.add_task.assert_not_called()

    def test_failed_create_refreshes_banner(self, app, board_screen):
        app.board_service.add_task.return_value = None

        with on_screen(board_screen):
            app.action_new_task()
            pushed_callback(app)("Buy milk")

        board_screen.refresh_board.assert_called_once_with()
        app.notify.assert_not_called()

    def test_ignored_while_dragging(self, app, board_screen):
        board_screen.is_dragging = True
        with on_screen(board_screen):
            app.action_new_task()
        app.push_screen.assert_not_called()


class TestActionEditTask:
    """Tests for editing task text."""

    def test_saves_new_text(self, app, board_screen):
        with on_screen(board_screen):
            app.action_edit_task()
            modal = app.push_screen.call_args.args[0]
            pushed_callback(app)("New text")

        assert isinstance(modal, TaskInputModal)
        app.board_service.save_edit.assert_called_once_with(Column.ACTIVE, "task-1", "New text")
        board_screen.refresh_board.assert_called_once_with(focus_task_id="task-1")

    def test_unchanged_text_sends_nothing(self, app, board_screen):
        with on_screen(board_screen):
            app.action_edit_task()
            pushed_callback(app)("Old text ")

        app.board_service.save_edit.assert_not_called()

    def test_no_task_focused(self, app, board_screen):
        board_screen.get_current_task.return_value = None
        with on_screen(board_screen):
            app.action_edit_task()
        app.push_screen.assert_not_called()


class TestActionDeleteTask:
    """Tests for deleting tasks."""

    def test_confirmed_delete(self, app, board_screen):
        app.board_service.delete_task.return_value = True

        with on_screen(board_screen):
            app.action_delete_task()
            assert isinstance(app.push_screen.call_args.args[0], ConfirmModal)
            pushed_callback(app)(True)

        app.board_service.delete_task.assert_called_once_with(Column.ACTIVE, "task-1")
        app.notify.assert_called_once_with("Task deleted", timeout=2)
        board_screen.refresh_board.assert_called_once()

    def test_failed_delete_does_not_notify(self, app, board_screen):
        app.board_service.delete_task.return_value = False

        with on_screen(board_screen):
            app.action_delete_task()
            pushed_callback(app)(True)

        app.notify.assert_not_called()
        board_screen.refresh_board.assert_called_once()

    @pytest.mark.parametrize("answer", [False, None])
    def test_declined_delete(self, app, board_screen, answer):
        with on_screen(board_screen):
            app.action_delete_task()
            pushed_callback(app)(answer)

        app.board_service.delete_task.assert_not_called()


class TestNavigationAndDrag:
    """Arrow keys navigate, or move the picked-up task."""

    @pytest.mark.parametrize(
        "action, method, arg",
        [
            ("action_nav_left", "navigate_column", -1),
            ("action_nav_right", "navigate_column", 1),
            ("action_nav_up", "navigate_task", -1),
            ("action_nav_down", "navigate_task", 1),
        ],
    )
    def test_navigation(self, app, board_screen, action, method, arg):
        with on_screen(board_screen):
            getattr(app, action)()
        getattr(board_screen, method).assert_called_once_with(arg)
        board_screen.move_dragged.assert_not_called()

    def test_arrows_move_dragged_task(self, app, board_screen):
        board_screen.is_dragging = True
        with on_screen(board_screen):
            app.action_nav_right()
        board_screen.move_dragged.assert_called_once_with("right")
        board_screen.navigate_column.assert_not_called()

    def test_space_toggles_drag(self, app, board_screen):
        with on_screen(board_screen):
            app.action_toggle_drag()
        board_screen.toggle_drag.assert_called_once()

    def test_escape_cancels_drag(self, app, board_screen):
        with on_screen(board_screen):
            app.action_escape()
        board_screen.cancel_drag.assert_called_once()

    def test_escape_dismisses_modal(self, app):
        modal = MagicMock(spec=ModalScreen)
        with on_screen(modal):
            app.action_escape()
        modal.dismiss.assert_called_once_with()


class TestBoardActions:
    """Reload and banner actions."""

    def test_reload(self, app, board_screen):
        with on_screen(board_screen):
            app.action_reload()
        board_screen.reload_board.assert_called_once()

    def test_dismiss_error(self, app, board_screen):
        with on_screen(board_screen):
            app.action_dismiss_error()
        board_screen.dismiss_error.assert_called_once()

    def test_actions_ignored_off_board(self, app):
        with on_screen(MagicMock(spec=ModalScreen)):
            app.action_reload()
            app.action_new_task()
        app.push_screen.assert_not_called()
