from __future__ import annotations

import dataclasses

import pytest

from wobridge.extraction import NOT_AVAILABLE, WorkOrderRecord, assemble_record, coerce_number, parse_work_order
from wobridge.extraction.models import EXTRACTED_FIELDS, FIELD_NAMES


VENDOR_PURCHASE_ORDER = """Northwind Supply Co.
Purchase Order: 558812
Remit all invoices to

ap@northwind.example
Shipping Terms: FOB Destination
Payment Terms: Net 30
NTE: Replacement compressor
1200.00 1 1200.00
"""


def test_unlabeled_text_displays_all_not_available() -> None:
    record = parse_work_order("Just a note without any labels.")
    display = record.to_display()

    assert set(display) == set(FIELD_NAMES)
    assert all(value == NOT_AVAILABLE for value in display.values())
    assert record.missing_fields() == list(FIELD_NAMES)


def test_primary_value_wins_over_fallback() -> None:
    record = assemble_record({"state": "FL"}, {"state": "GA", "city": "Macon"})

    assert record.state == "FL"
    assert record.city == "Macon"


def test_empty_values_are_treated_as_absent() -> None:
    record = assemble_record({"notes": ""}, {"notes": ""})
    assert record.notes is None
    assert record.to_display()["notes"] == NOT_AVAILABLE


def test_assignee_and_project_are_injected() -> None:
    record = parse_work_order("Work Order: 12345", assignee_id="987", project="Spring Refresh")

    assert record.assignee_id == "987"
    assert record.project == "Spring Refresh"
    assert record.work_order == "12345"


def test_record_is_immutable() -> None:
    record = parse_work_order("Work Order: 12345")
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.work_order = "1"  # type: ignore[misc]


def test_from_values_rejects_unknown_fields() -> None:
    with pytest.raises(ValueError, match="Unknown record fields: colour"):
        WorkOrderRecord.from_values({"colour": "blue"})


def test_extracted_fields_exclude_injected_identity() -> None:
    assert "assignee_id" not in EXTRACTED_FIELDS
    assert "project" not in EXTRACTED_FIELDS
    assert len(EXTRACTED_FIELDS) == len(FIELD_NAMES) - 2


def test_vendor_purchase_order_end_to_end() -> None:
    record = parse_work_order(VENDOR_PURCHASE_ORDER)

    assert record.purchase_order == "558812"
    assert record.pm_email == "ap@northwind.example"
    assert record.shipping_terms == "FOB Destination"
    assert record.payment_terms == "Net 30"
    assert record.item_description == "NTE: Replacement compressor"
    assert record.unit_cost == "1200.00"
    assert record.quantity == "1"
    assert record.total_cost == "1200.00"
    assert record.work_order is None


def test_parse_is_idempotent() -> None:
    assert parse_work_order(VENDOR_PURCHASE_ORDER) == parse_work_order(VENDOR_PURCHASE_ORDER)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, 0),
        ("N/A", 0),
        ("", 0),
        ("00123", 123),
        (" 4711 ", 4711),
        ("8800-01", 0),
        ("١٢٣", 0),
    ],
)
def test_coerce_number(value: str | None, expected: int) -> None:
    assert coerce_number(value) == expected
