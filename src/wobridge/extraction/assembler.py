"""Merge extraction passes and injected identity into one record."""

from __future__ import annotations

from typing import Mapping

from wobridge.extraction.engine import FieldExtractor, extract_fields
from wobridge.extraction.models import EXTRACTED_FIELDS, WorkOrderRecord


def assemble_record(
    primary: Mapping[str, str],
    fallback: Mapping[str, str] | None = None,
    *,
    assignee_id: str | None = None,
    project: str | None = None,
) -> WorkOrderRecord:
    """Build a record where labeled values win and fallbacks fill the gaps."""

    fallback = fallback or {}
    values: dict[str, str | None] = {}
    for name in EXTRACTED_FIELDS:
        value = primary.get(name) or fallback.get(name)
        values[name] = value or None

    values["assignee_id"] = assignee_id or None
    values["project"] = project or None
    return WorkOrderRecord.from_values(values)


def parse_work_order(
    text: str,
    *,
    assignee_id: str | None = None,
    project: str | None = None,
    extractor: FieldExtractor | None = None,
) -> WorkOrderRecord:
    """Normalize, extract and assemble *text* in one call."""

    result = extractor.extract(text) if extractor is not None else extract_fields(text)
    return assemble_record(result.primary, result.fallback, assignee_id=assignee_id, project=project)
