"""Widget components."""

from ..screens.help import HelpScreen
from .column import EmptyColumnMessage, KanbanColumn
from .confirm_modal import ConfirmModal
from .task_card import TaskCard
from .task_input_modal import TaskInputModal

__all__ = [
    "ConfirmModal",
    "EmptyColumnMessage",
    "HelpScreen",
    "KanbanColumn",
    "TaskCard",
    "TaskInputModal",
]
