"""Routing entrypoint that decodes a source file with the matching adapter."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from wobridge.ingestion.adapters.base import DocumentAdapter
from wobridge.ingestion.dedupe import DocumentFingerprint, fingerprint_document
from wobridge.ingestion.models import DecodedDocument

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DocumentDecodeError(Exception):
    """Domain error for unreadable or undecodable source documents."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message} (path={self.path})"


@dataclass(slots=True)
class ReadResult:
    """Decoded document plus its fingerprint for duplicate checks."""

    document: DecodedDocument
    fingerprint: DocumentFingerprint


class DocumentReader:
    """Resolve the right adapter and return decoded text."""

    def __init__(self, sniff_bytes: int = 4096) -> None:
        self._sniff_bytes = sniff_bytes
        self._adapter_map: dict[str, DocumentAdapter] = {}

    @property
    def adapter_map(self) -> dict[str, DocumentAdapter]:
        """Registered adapters keyed by adapter name."""

        return dict(self._adapter_map)

    def register_adapter(self, name: str, adapter: DocumentAdapter) -> None:
        """Register an adapter implementation by key."""

        if not name:
            raise ValueError("Adapter name cannot be empty")
        self._adapter_map[name] = adapter

    def read(self, path: str | Path) -> ReadResult:
        """Decode *path* and fingerprint it; raise DocumentDecodeError on failure."""

        source = Path(path)
        raw_bytes = self._read_bytes(source)
        sniffed = raw_bytes[: self._sniff_bytes]

        for name, adapter in self._adapter_map.items():
            if not adapter.supports(source, sniffed):
                continue
            try:
                decoded = adapter.extract(source)
            except Exception as exc:
                raise DocumentDecodeError(source, f"Adapter '{name}' failed to decode document: {exc}") from exc

            if not isinstance(decoded, DecodedDocument):
                raise DocumentDecodeError(source, "Adapter returned non-canonical output")
            logger.info("Decoded %s with %s adapter (%d chars)", source.name, name, len(decoded.text))
            return ReadResult(document=decoded, fingerprint=fingerprint_document(raw_bytes, decoded.text))

        raise DocumentDecodeError(source, "No adapter registered for file content")

    def _read_bytes(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise DocumentDecodeError(path, f"Failed to read source file: {exc}") from exc


def build_default_reader() -> DocumentReader:
    from wobridge.ingestion.adapters import build_default_adapters

    reader = DocumentReader()
    for name, adapter in build_default_adapters().items():
        reader.register_adapter(name, adapter)
    return reader
