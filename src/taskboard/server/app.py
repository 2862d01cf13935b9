"""Task API server.

Routes:
    GET    /health          → { status, service }
    GET    /api/tasks       → { todo: [Task], active: [Task], completed: [Task] }
    POST   /api/tasks       → body { text }, returns Task (201)
    PUT    /api/tasks/<id>  → body { text?, column? }, returns Task
    DELETE /api/tasks/<id>  → { message }

Errors are JSON bodies of the form { "error": "..." }.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flask import Flask, jsonify, request
from flask_cors import CORS

from ..models import Board, Column, TaskUpdate
from ..repositories import StoreError, TaskRepositoryProtocol, build_repository

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)

SERVICE_NAME = "taskboard"


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _json_body() -> dict:
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


def create_app(repository: TaskRepositoryProtocol) -> Flask:
    """Build the Flask application serving the task API."""
    app = Flask(__name__)
    app.extensions["taskboard.repository"] = repository

    CORS(app, max_age=3600)

    @app.route("/health")
    def health():
        return jsonify({"status": "healthy", "service": SERVICE_NAME})

    @app.route("/api/tasks", methods=["GET"])
    def get_tasks():
        try:
            tasks = repository.list_all()
        except StoreError as e:
            logger.error("Error fetching tasks: %s", e)
            return _error("Failed to fetch tasks", 500)
        return jsonify(Board.from_tasks(tasks).to_wire())

    @app.route("/api/tasks", methods=["POST"])
    def create_task():
        data = _json_body()
        text = data.get("text")
        if not isinstance(text, str) or not text.strip():
            return _error("text is required", 400)

        try:
            task = repository.create(text.strip())
        except StoreError as e:
            logger.error("Error creating task: %s", e)
            return _error("Failed to create task", 500)

        logger.info("Task created: %s", task.id)
        return jsonify(task.to_wire()), 201

    @app.route("/api/tasks/<task_id>", methods=["PUT"])
    def update_task(task_id: str):
        data = _json_body()

        text = data.get("text")
        if text is not None and (not isinstance(text, str) or not text.strip()):
            return _error("text must be a non-empty string", 400)

        column = None
        if data.get("column") is not None:
            column = Column.parse(data["column"])
            if column is None:
                return _error(f"Invalid column: {data['column']}", 400)

        changes = TaskUpdate(text=text.strip() if text is not None else None, column=column)
        if changes.is_empty:
            return _error("No fields to update", 400)

        try:
            task = repository.update(task_id, changes)
        except StoreError as e:
            logger.error("Error updating task: %s", e)
            return _error("Failed to update task", 500)

        if task is None:
            return _error("Task not found", 404)

        logger.info("Task updated: %s (%s)", task_id, ", ".join(changes.to_wire()))
        return jsonify(task.to_wire())

    @app.route("/api/tasks/<task_id>", methods=["DELETE"])
    def delete_task(task_id: str):
        try:
            deleted = repository.delete(task_id)
        except StoreError as e:
            logger.error("Error deleting task: %s", e)
            return _error("Failed to delete task", 500)

        if not deleted:
            return _error("Task not found", 404)

        logger.info("Task deleted: %s", task_id)
        return jsonify({"message": "Task deleted successfully"})

    return app


def run_server(settings: Settings) -> None:
    """Serve the API with the repository selected in settings."""
    repository = build_repository(settings)
    app = create_app(repository)
    logger.info("Starting server on %s:%d (store=%s)", settings.host, settings.port, settings.store)
    app.run(host=settings.host, port=settings.port, debug=False, threaded=True)
