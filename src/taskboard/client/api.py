"""HTTP client for the task API."""

from __future__ import annotations

import logging
import time
from typing import Any
from urllib.parse import quote

import httpx

from ..models import Board, Column, Task, TaskUpdate
from .errors import (
    CreateError,
    DeleteError,
    DeleteNotFoundError,
    FetchError,
    TaskApiError,
    UpdateError,
    UpdateNotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8080/api"


class TaskApiClient:
    """Client for the task REST API.

    Thin wrapper around ``httpx`` that maps every non-2xx response and every
    transport failure onto the operation's error type:

    - ``fetch_all`` raises ``FetchError``
    - ``create`` raises ``CreateError``
    - ``update`` raises ``UpdateError`` (``UpdateNotFoundError`` on 404)
    - ``delete`` raises ``DeleteError`` (``DeleteNotFoundError`` on 404)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: API root including the ``/api`` prefix
            timeout: Request timeout in seconds
            transport: Optional transport (tests use mock or WSGI transports)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> TaskApiClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @classmethod
    def from_settings(cls, settings: Any) -> TaskApiClient:
        """Create a client from application settings."""
        return cls(settings.api_url, timeout=settings.timeout)

    # --- Operations ---

    def fetch_all(self) -> Board:
        """Fetch every task grouped by column.

        Raises:
            FetchError: Transport failure, non-success status or bad payload
        """
        data = self._request("fetch_all", "GET", "/tasks", FetchError)
        try:
            return Board.model_validate(data)
        except ValueError as e:
            logger.error("fetch_all: invalid payload: %s", e)
            raise FetchError(f"Invalid response: {e}") from e

    def create(self, text: str) -> Task:
        """Create a task; the server assigns its id and puts it in todo.

        Raises:
            CreateError: Transport failure, non-success status or bad payload
        """
        data = self._request("create", "POST", "/tasks", CreateError, json={"text": text})
        return self._parse_task(data, CreateError)

    def update(
        self,
        task_id: str,
        text: str | None = None,
        column: Column | str | None = None,
    ) -> Task:
        """Partially update a task. Only the fields given are sent.

        Raises:
            UpdateNotFoundError: The task does not exist
            UpdateError: Any other failure
        """
        try:
            body = TaskUpdate(text=text, column=column).to_wire()
        except ValueError as e:
            raise UpdateError(f"Invalid update: {e}") from e
        data = self._request(
            "update",
            "PUT",
            f"/tasks/{quote(task_id, safe='')}",
            UpdateError,
            not_found_error=UpdateNotFoundError,
            json=body,
        )
        return self._parse_task(data, UpdateError)

    def delete(self, task_id: str) -> None:
        """Delete a task.

        Raises:
            DeleteNotFoundError: The task does not exist
            DeleteError: Any other failure
        """
        self._request(
            "delete",
            "DELETE",
            f"/tasks/{quote(task_id, safe='')}",
            DeleteError,
            not_found_error=DeleteNotFoundError,
        )

    def health(self) -> dict[str, Any]:
        """Query the server health endpoint (served outside the /api prefix)."""
        root = self.base_url.removesuffix("/api")
        data = self._request("health", "GET", f"{root}/health", TaskApiError)
        return data if isinstance(data, dict) else {}

    # --- Private Methods ---

    def _request(
        self,
        op_name: str,
        method: str,
        path: str,
        error: type[TaskApiError],
        not_found_error: type[TaskApiError] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None if empty)."""
        logger.debug("%s %s %s: body=%s", op_name, method, path, json)

        start_time = time.monotonic()
        try:
            response = self._client.request(method, path, json=json)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("%s failed after %.0fms: %s", op_name, elapsed_ms, e)
            raise error(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000

        if response.status_code == 404 and not_found_error is not None:
            logger.error("%s: 404 Not Found (%.0fms)", op_name, elapsed_ms)
            raise not_found_error("Task not found", status_code=404)

        if not response.is_success:
            logger.error(
                "%s: HTTP %d (%.0fms)", op_name, response.status_code, elapsed_ms
            )
            raise error(
                f"HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        logger.info("%s: %d OK (%.0fms)", op_name, response.status_code, elapsed_ms)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error("%s: Invalid JSON response (%.0fms)", op_name, elapsed_ms)
            raise error(f"Invalid JSON response: {e}") from e

    @staticmethod
    def _parse_task(data: Any, error: type[TaskApiError]) -> Task:
        try:
            return Task.model_validate(data)
        except ValueError as e:
            raise error(f"Invalid task payload: {e}") from e
