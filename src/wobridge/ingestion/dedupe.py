"""Document fingerprinting so the same work order is not posted twice."""

from __future__ import annotations

from dataclasses import dataclass
import hashlib
import json
import logging
from pathlib import Path

from wobridge.extraction.normalization import normalize_text

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DocumentFingerprint:
    """Dual fingerprint: raw bytes and whitespace/case-normalized text."""

    binary_hash: str
    normalized_text_hash: str


@dataclass(slots=True)
class DedupeDecision:
    is_duplicate: bool
    reason: str | None
    fingerprint: DocumentFingerprint


class ProcessedRegistry:
    """Fingerprints of documents that already produced a board item."""

    def __init__(self) -> None:
        self._binary_hashes: set[str] = set()
        self._normalized_text_hashes: set[str] = set()

    def check(self, fingerprint: DocumentFingerprint) -> DedupeDecision:
        """Report whether *fingerprint* was recorded before, without recording it."""

        if fingerprint.binary_hash in self._binary_hashes:
            return DedupeDecision(is_duplicate=True, reason="binary-match", fingerprint=fingerprint)
        if fingerprint.normalized_text_hash and fingerprint.normalized_text_hash in self._normalized_text_hashes:
            return DedupeDecision(is_duplicate=True, reason="normalized-content-match", fingerprint=fingerprint)
        return DedupeDecision(is_duplicate=False, reason=None, fingerprint=fingerprint)

    def record(self, fingerprint: DocumentFingerprint) -> None:
        self._binary_hashes.add(fingerprint.binary_hash)
        if fingerprint.normalized_text_hash:
            self._normalized_text_hashes.add(fingerprint.normalized_text_hash)

    def seed(self, *, binary_hashes: set[str], normalized_text_hashes: set[str]) -> None:
        self._binary_hashes.update(binary_hashes)
        self._normalized_text_hashes.update(normalized_text_hashes)

    def snapshot(self) -> dict[str, list[str]]:
        return {
            "binary_hashes": sorted(self._binary_hashes),
            "normalized_text_hashes": sorted(self._normalized_text_hashes),
        }

    @classmethod
    def load(cls, cache_path: Path) -> "ProcessedRegistry":
        registry = cls()
        if not cache_path.exists():
            return registry

        data = json.loads(cache_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Processed cache is not a JSON object: {cache_path}")
        registry.seed(
            binary_hashes=set(data.get("binary_hashes", [])),
            normalized_text_hashes=set(data.get("normalized_text_hashes", [])),
        )
        logger.debug("Loaded %d processed fingerprints from %s", len(registry._binary_hashes), cache_path)
        return registry

    def save(self, cache_path: Path) -> None:
        cache_path.write_text(json.dumps(self.snapshot(), ensure_ascii=False, indent=2), encoding="utf-8")


def fingerprint_document(raw_bytes: bytes, text: str) -> DocumentFingerprint:
    binary_hash = hashlib.sha256(raw_bytes).hexdigest()
    normalized = normalize_text(text)
    # Empty text (unreadable scans) must not collide across documents.
    normalized_text_hash = hashlib.sha256(normalized.encode("utf-8")).hexdigest() if normalized else ""
    return DocumentFingerprint(binary_hash=binary_hash, normalized_text_hash=normalized_text_hash)
