"""MongoDB repository for task storage."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from ..models import Column, StoredTask, Task, TaskUpdate
from ..utils import now_utc
from .errors import StoreError
from .ids import new_task_id

if TYPE_CHECKING:
    from pymongo.collection import Collection

    from ..config import Settings

logger = logging.getLogger(__name__)


class MongoRepository:
    """
    Repository backed by a MongoDB collection.

    Documents use ``taskId`` for the public id (Mongo keeps its own ``_id``),
    plus ``text``, ``column`` and ``created``. Natural order is insertion order.
    """

    def __init__(self, collection: Collection) -> None:
        self.collection = collection

    @classmethod
    def from_settings(cls, settings: Settings) -> MongoRepository:
        """Connect using the URI and names from settings."""
        logger.info("Connecting to MongoDB at %s", settings.mongodb_uri)
        client: MongoClient = MongoClient(settings.mongodb_uri)
        collection = client[settings.database_name][settings.collection_name]
        return cls(collection)

    def list_all(self) -> list[Task]:
        try:
            documents = list(self.collection.find({}))
        except PyMongoError as e:
            raise StoreError(f"Failed to fetch tasks: {e}") from e

        tasks = []
        for document in documents:
            task = self._to_task(document)
            if task is not None:
                tasks.append(task)
        return tasks

    def get(self, task_id: str) -> Task | None:
        try:
            document = self.collection.find_one({"taskId": task_id})
        except PyMongoError as e:
            raise StoreError(f"Failed to fetch task: {e}") from e
        return self._to_task(document) if document else None

    def exists(self, task_id: str) -> bool:
        return self.get(task_id) is not None

    def create(self, text: str) -> Task:
        task_id = new_task_id(self.exists)
        stored = StoredTask(id=task_id, text=text, column=Column.TODO, created=now_utc())
        try:
            self.collection.insert_one(
                {
                    "taskId": stored.id,
                    "text": stored.text,
                    "column": stored.column.value,
                    "created": stored.created,
                }
            )
        except PyMongoError as e:
            raise StoreError(f"Failed to create task: {e}") from e
        return stored.to_task()

    def update(self, task_id: str, changes: TaskUpdate) -> Task | None:
        try:
            result = self.collection.update_one(
                {"taskId": task_id}, {"$set": changes.to_wire()}
            )
            if result.matched_count == 0:
                return None
            document = self.collection.find_one({"taskId": task_id})
        except PyMongoError as e:
            raise StoreError(f"Failed to update task: {e}") from e
        return self._to_task(document) if document else None

    def delete(self, task_id: str) -> bool:
        try:
            result = self.collection.delete_one({"taskId": task_id})
        except PyMongoError as e:
            raise StoreError(f"Failed to delete task: {e}") from e
        return result.deleted_count > 0

    @staticmethod
    def _to_task(document: dict[str, Any]) -> Task | None:
        try:
            return Task.model_validate(
                {
                    "taskId": document["taskId"],
                    "text": document.get("text", ""),
                    "column": document.get("column"),
                }
            )
        except (KeyError, ValueError) as e:
            logger.warning("Skipping malformed task document: %s", e)
            return None
