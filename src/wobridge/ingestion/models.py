"""Canonical decoded-document structure shared by all format adapters."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class DecodedDocument:
    """Plain text decoded from one source file, plus light provenance."""

    source_path: str
    text: str
    format_name: str
    page_count: int | None = None
    subject: str | None = None
    warnings: list[str] = field(default_factory=list)
