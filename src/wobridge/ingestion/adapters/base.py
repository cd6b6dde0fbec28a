"""Shared adapter contract for per-format document decoders."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from wobridge.ingestion.models import DecodedDocument


@runtime_checkable
class DocumentAdapter(Protocol):
    """Protocol that every format adapter must implement."""

    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        """Return True when this adapter can decode the given file."""

    def extract(self, path: Path) -> DecodedDocument:
        """Decode a document into plain text."""
