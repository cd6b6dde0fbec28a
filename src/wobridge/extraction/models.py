"""Canonical record produced by the work-order field extractor."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Mapping

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True, slots=True)
class WorkOrderRecord:
    """Normalized work-order fields; ``None`` marks a field that was not found."""

    work_order: str | None = None
    purchase_order: str | None = None
    scheduled_date: str | None = None
    location: str | None = None
    city: str | None = None
    state: str | None = None
    check_in_phone: str | None = None
    backup_phone: str | None = None
    flat_rate_price: str | None = None
    ordered_by: str | None = None
    pm_email: str | None = None
    shipping_terms: str | None = None
    payment_terms: str | None = None
    item_description: str | None = None
    unit_cost: str | None = None
    quantity: str | None = None
    total_cost: str | None = None
    notes: str | None = None
    instructions: str | None = None
    scope_of_work: str | None = None
    project: str | None = None
    assignee_id: str | None = None

    def to_display(self) -> dict[str, str]:
        """Return every field as a string, substituting ``N/A`` for absent values."""

        return {name: display_value(getattr(self, name)) for name in FIELD_NAMES}

    def missing_fields(self) -> list[str]:
        return [name for name in FIELD_NAMES if getattr(self, name) is None]

    @classmethod
    def from_values(cls, values: Mapping[str, str | None]) -> "WorkOrderRecord":
        unknown = set(values) - set(FIELD_NAMES)
        if unknown:
            raise ValueError(f"Unknown record fields: {', '.join(sorted(unknown))}")
        return cls(**dict(values))


FIELD_NAMES: tuple[str, ...] = tuple(field.name for field in fields(WorkOrderRecord))

# Fields filled by the extractor itself (project and assignee are injected).
EXTRACTED_FIELDS: tuple[str, ...] = tuple(
    name for name in FIELD_NAMES if name not in {"project", "assignee_id"}
)


def display_value(value: str | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return value


def coerce_number(value: str | None) -> int:
    """Coerce an identifier to an integer for numeric board columns.

    Absent or non-numeric values map to ``0`` instead of raising.
    """

    if value is None:
        return 0
    cleaned = value.strip()
    if not (cleaned.isascii() and cleaned.isdigit()):
        return 0
    return int(cleaned)
