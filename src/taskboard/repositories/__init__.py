"""Repository layer for task documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import StoreError
from .filesystem import FilesystemRepository
from .memory import MemoryRepository
from .protocol import TaskRepositoryProtocol

if TYPE_CHECKING:
    from ..config import Settings


def build_repository(settings: Settings) -> TaskRepositoryProtocol:
    """Create the repository selected by ``settings.store``."""
    if settings.store == "memory":
        return MemoryRepository()
    if settings.store == "mongo":
        # Import here so pymongo is only loaded when used
        from .mongo import MongoRepository

        return MongoRepository.from_settings(settings)

    repository = FilesystemRepository(settings.data_dir)
    repository.ensure_directory()
    return repository


__all__ = [
    "FilesystemRepository",
    "MemoryRepository",
    "StoreError",
    "TaskRepositoryProtocol",
    "build_repository",
]
