"""monday.com GraphQL client used to post extracted work orders."""

from __future__ import annotations

from dataclasses import dataclass, replace
import json
import logging
import time
from typing import Any, Callable

import requests

from wobridge.board.columns import build_column_values, item_name
from wobridge.board.config import BoardSettings
from wobridge.extraction.models import WorkOrderRecord

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

WHOAMI_QUERY = "query { me { id name } }"

CREATE_ITEM_MUTATION = """
mutation ($boardId: ID!, $itemName: String!, $columnValues: JSON!) {
    create_item (board_id: $boardId, item_name: $itemName, column_values: $columnValues) {
        id
    }
}
"""


@dataclass(slots=True)
class BoardRequestError(RuntimeError):
    """Domain error raised for failed board requests or invalid responses."""

    operation: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (operation={self.operation})"


def _graphql_errors(payload: dict[str, Any]) -> str | None:
    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        messages = [
            str(error.get("message", error)) if isinstance(error, dict) else str(error) for error in errors
        ]
        return "; ".join(messages)
    if payload.get("error_message"):
        return str(payload["error_message"])
    return None


class MondayClient:
    """Identity lookup and item creation with bounded retry on transient errors.

    Transport errors, HTTP 429 and 5xx responses are retried with exponential
    backoff; GraphQL errors and other 4xx responses fail immediately.
    """

    def __init__(
        self,
        settings: BoardSettings,
        *,
        session: Any | None = None,
        retry_base_seconds: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if retry_base_seconds < 0:
            raise ValueError("retry_base_seconds cannot be negative")

        self._settings = settings
        self._session = session or requests.Session()
        self._retry_base_seconds = retry_base_seconds
        self._sleep = sleep

    @property
    def board_id(self) -> str:
        return self._settings.board_id

    def whoami(self) -> str:
        """Return the id of the user that owns the API token."""

        data = self._execute(WHOAMI_QUERY, None, operation="whoami")
        me = data.get("me")
        if not isinstance(me, dict) or me.get("id") in (None, ""):
            raise BoardRequestError(operation="whoami", message="Response missing 'me.id'")
        return str(me["id"])

    def create_item(self, record: WorkOrderRecord, assignee_id: str, *, source_name: str | None = None) -> str:
        """Create a board item for *record* and return its id."""

        if not assignee_id:
            raise ValueError("assignee_id cannot be empty")

        if record.assignee_id != assignee_id:
            record = replace(record, assignee_id=assignee_id)

        column_values = build_column_values(record, self._settings.column_ids, source_name=source_name)
        variables = {
            "boardId": self._settings.board_id,
            "itemName": item_name(record),
            "columnValues": json.dumps(column_values),
        }
        data = self._execute(CREATE_ITEM_MUTATION, variables, operation="create_item")

        item = data.get("create_item")
        if not isinstance(item, dict) or item.get("id") in (None, ""):
            raise BoardRequestError(operation="create_item", message="Response missing 'create_item.id'")
        item_id = str(item["id"])
        logger.info("Created board item %s on board %s", item_id, self._settings.board_id)
        return item_id

    def _execute(self, query: str, variables: dict[str, Any] | None, *, operation: str) -> dict[str, Any]:
        body: dict[str, Any] = {"query": query}
        if variables is not None:
            body["variables"] = variables

        response = self._post_with_retries(body, operation=operation)
        try:
            payload = response.json()
        except ValueError as exc:
            raise BoardRequestError(operation=operation, message=f"Response is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise BoardRequestError(operation=operation, message="Response payload is not an object")

        error_text = _graphql_errors(payload)
        if error_text:
            raise BoardRequestError(operation=operation, message=f"GraphQL error: {error_text}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise BoardRequestError(operation=operation, message="Response missing 'data' object")
        return data

    def _post_with_retries(self, body: dict[str, Any], *, operation: str) -> Any:
        headers = {
            "Authorization": self._settings.api_key,
            "API-Version": self._settings.api_version,
            "Content-Type": "application/json",
        }
        attempts = self._settings.max_retries + 1
        last_error: Exception | None = None

        for attempt in range(attempts):
            try:
                response = self._session.post(
                    self._settings.api_url,
                    json=body,
                    headers=headers,
                    timeout=self._settings.timeout_seconds,
                )
            except (requests.ConnectionError, requests.Timeout) as exc:
                last_error = exc
            except requests.RequestException as exc:
                raise BoardRequestError(operation=operation, message=f"Request failed: {exc}") from exc
            else:
                status = response.status_code
                if status < 400:
                    return response
                detail = f"HTTP {status}: {str(response.text)[:200]}"
                if status not in _RETRYABLE_STATUS_CODES:
                    raise BoardRequestError(operation=operation, message=detail)
                last_error = BoardRequestError(operation=operation, message=detail)

            if attempt < self._settings.max_retries:
                delay = self._retry_base_seconds * (2**attempt)
                logger.warning(
                    "Board %s attempt %d/%d failed (%s); retrying in %.2fs",
                    operation,
                    attempt + 1,
                    attempts,
                    last_error,
                    delay,
                )
                self._sleep(delay)

        detail = str(last_error) if last_error is not None else "unknown board error"
        raise BoardRequestError(
            operation=operation,
            message=f"Request failed after {attempts} attempt(s): {detail}",
        ) from last_error
