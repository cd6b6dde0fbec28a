"""Runtime configuration for the monday.com board client."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from typing import Mapping


DEFAULT_MONDAY_API_URL = "https://api.monday.com/v2"
DEFAULT_MONDAY_API_VERSION = "2024-10"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_RETRIES = 2

# Logical column -> monday.com column id on the work-order board
DEFAULT_COLUMN_IDS: dict[str, str] = {
    "summary": "text_column",
    "scheduled_date": "date_column",
    "location": "location_column",
    "check_in_phone": "phone_column",
    "backup_phone": "backup_phone_column",
    "flat_rate_price": "price_column",
    "project": "project_column",
    "ordered_by": "pm_column",
    "work_order": "wo_number_column",
    "purchase_order": "po_number_column",
    "state": "state_column",
    "notes": "notes_column",
    "wo_file": "wo_file_column",
    "assignee": "person",
}


def _parse_column_ids(raw_value: str) -> dict[str, str]:
    try:
        overrides = json.loads(raw_value)
    except json.JSONDecodeError as exc:
        raise ValueError(f"MONDAY_COLUMN_IDS must be a JSON object: {exc}") from exc
    if not isinstance(overrides, dict):
        raise ValueError("MONDAY_COLUMN_IDS must be a JSON object")

    unknown = set(overrides) - set(DEFAULT_COLUMN_IDS)
    if unknown:
        raise ValueError(f"MONDAY_COLUMN_IDS has unknown columns: {', '.join(sorted(unknown))}")

    merged = dict(DEFAULT_COLUMN_IDS)
    for key, value in overrides.items():
        if value is None:
            # null disables the column on boards that lack it
            merged.pop(key)
            continue
        merged[key] = str(value)
    return merged


@dataclass(frozen=True, slots=True)
class BoardSettings:
    """Validated monday.com settings injected into the board client."""

    api_key: str
    board_id: str
    api_url: str = DEFAULT_MONDAY_API_URL
    api_version: str = DEFAULT_MONDAY_API_VERSION
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    column_ids: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_COLUMN_IDS))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BoardSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        api_key = source.get("MONDAY_API_KEY", "").strip()
        board_id = source.get("MONDAY_BOARD_ID", "").strip()

        missing: list[str] = []
        if not api_key:
            missing.append("MONDAY_API_KEY")
        if not board_id:
            missing.append("MONDAY_BOARD_ID")
        if missing:
            raise ValueError(f"Missing required board environment variables: {', '.join(missing)}")

        if not board_id.isdigit():
            raise ValueError("MONDAY_BOARD_ID must be numeric")

        api_url = source.get("MONDAY_API_URL", DEFAULT_MONDAY_API_URL).strip()
        if not (api_url.startswith("http://") or api_url.startswith("https://")):
            raise ValueError("MONDAY_API_URL must start with http:// or https://")

        api_version = source.get("MONDAY_API_VERSION", DEFAULT_MONDAY_API_VERSION).strip()
        if not api_version:
            raise ValueError("MONDAY_API_VERSION cannot be empty")

        timeout_raw = source.get("MONDAY_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)).strip()
        timeout_seconds = float(timeout_raw)
        if timeout_seconds <= 0:
            raise ValueError("MONDAY_TIMEOUT_SECONDS must be > 0")

        retries_raw = source.get("MONDAY_MAX_RETRIES", str(DEFAULT_MAX_RETRIES)).strip()
        max_retries = int(retries_raw)
        if max_retries < 0:
            raise ValueError("MONDAY_MAX_RETRIES cannot be negative")

        columns_raw = source.get("MONDAY_COLUMN_IDS", "").strip()
        column_ids = _parse_column_ids(columns_raw) if columns_raw else dict(DEFAULT_COLUMN_IDS)

        return cls(
            api_key=api_key,
            board_id=board_id,
            api_url=api_url.rstrip("/"),
            api_version=api_version,
            timeout_seconds=timeout_seconds,
            max_retries=max_retries,
            column_ids=column_ids,
        )
