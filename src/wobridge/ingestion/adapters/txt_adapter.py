"""TXT adapter with encoding detection for exported work orders."""

from __future__ import annotations

from pathlib import Path

from charset_normalizer import from_bytes

from wobridge.ingestion.models import DecodedDocument

_BINARY_MAGIC = (b"%PDF-", b"PK\x03\x04")


def decode_bytes(raw: bytes) -> str:
    """Decode *raw* using the detected charset, falling back to utf-8/cp1252."""

    best = from_bytes(raw).best()
    if best is not None and best.encoding:
        return raw.decode(best.encoding)

    for fallback in ("utf-8", "cp1252"):
        try:
            return raw.decode(fallback)
        except UnicodeDecodeError:
            continue
    raise ValueError("Could not detect text encoding")


class TXTAdapter:
    """Decode plain-text documents such as copied email bodies."""

    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        if path.suffix.lower() == ".txt":
            return True
        if sniffed_bytes is None:
            return False
        if path.suffix.lower() in {".pdf", ".eml"}:
            return False
        if sniffed_bytes.lstrip().startswith(_BINARY_MAGIC):
            return False
        return b"\x00" not in sniffed_bytes

    def extract(self, path: Path) -> DecodedDocument:
        raw = path.read_bytes()
        text = decode_bytes(raw) if raw else ""
        return DecodedDocument(source_path=str(path), text=text, format_name="txt")
