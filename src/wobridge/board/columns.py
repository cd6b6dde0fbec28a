"""Render a work-order record into monday.com column values."""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Any, Mapping

from wobridge.extraction.models import NOT_AVAILABLE, WorkOrderRecord, coerce_number, display_value

logger = logging.getLogger(__name__)

_DATE_FORMATS = ("%m/%d/%Y", "%m/%d/%y", "%Y-%m-%d", "%m-%d-%Y", "%B %d, %Y", "%b %d, %Y")


def to_iso_date(value: str | None) -> str | None:
    """Parse the leading date of *value* (time of day is dropped)."""

    if not value:
        return None
    candidates = [value.strip()]
    head = value.strip().split()
    if head:
        candidates.append(head[0])
    if len(head) >= 3:
        candidates.append(" ".join(head[:3]))

    for candidate in candidates:
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(candidate, fmt).date().isoformat()
            except ValueError:
                continue
    return None


def item_name(record: WorkOrderRecord) -> str:
    return f"Work Order {display_value(record.work_order)}"


def build_column_values(
    record: WorkOrderRecord,
    column_ids: Mapping[str, str],
    *,
    source_name: str | None = None,
) -> dict[str, Any]:
    """Map record fields onto the configured board columns.

    Text columns carry ``N/A`` for absent values; WO/PO numbers are coerced to
    integers; the date column is omitted when the date cannot be parsed.
    The work-order file column carries the source document name.
    """

    display = record.to_display()
    logical: dict[str, Any] = {
        "summary": f"WO: {display['work_order']} | PO: {display['purchase_order']}",
        "location": display["location"],
        "check_in_phone": display["check_in_phone"],
        "backup_phone": display["backup_phone"],
        "flat_rate_price": display["flat_rate_price"],
        "project": display["project"],
        "ordered_by": display["ordered_by"],
        "work_order": coerce_number(record.work_order),
        "purchase_order": coerce_number(record.purchase_order),
        "state": display["state"],
        "notes": display["notes"],
        "wo_file": source_name or NOT_AVAILABLE,
    }

    iso_date = to_iso_date(record.scheduled_date)
    if iso_date is not None:
        logical["scheduled_date"] = {"date": iso_date}
    elif record.scheduled_date:
        logger.info("Dropping unparseable scheduled date: %r", record.scheduled_date)

    if record.assignee_id:
        person_id: int | str = int(record.assignee_id) if record.assignee_id.isdigit() else record.assignee_id
        logical["assignee"] = {"personsAndTeams": [{"id": person_id, "kind": "person"}]}

    return {column_ids[key]: value for key, value in logical.items() if key in column_ids}
