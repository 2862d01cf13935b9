"""Service layer for board logic."""

from .board_service import BoardService
from .board_store import BoardStore
from .drag_reconciler import (
    DragEvent,
    DragReconciler,
    OverTarget,
    Rect,
    resolve_destination,
)

__all__ = [
    "BoardService",
    "BoardStore",
    "DragEvent",
    "DragReconciler",
    "OverTarget",
    "Rect",
    "resolve_destination",
]
