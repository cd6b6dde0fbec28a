from __future__ import annotations

from pathlib import Path

import pytest

from wobridge.ingestion.dedupe import ProcessedRegistry, fingerprint_document


def test_registry_detects_binary_duplicate() -> None:
    registry = ProcessedRegistry()
    fingerprint = fingerprint_document(b"Work Order: 1", "Work Order: 1")

    assert not registry.check(fingerprint).is_duplicate
    registry.record(fingerprint)

    decision = registry.check(fingerprint)
    assert decision.is_duplicate
    assert decision.reason == "binary-match"


def test_registry_detects_normalized_content_duplicate() -> None:
    registry = ProcessedRegistry()
    registry.record(fingerprint_document(b"a", "Work Order:   12345\nState: GA"))

    decision = registry.check(fingerprint_document(b"b", "work order: 12345 state: ga"))

    assert decision.is_duplicate
    assert decision.reason == "normalized-content-match"


def test_check_does_not_record() -> None:
    registry = ProcessedRegistry()
    fingerprint = fingerprint_document(b"x", "x")

    registry.check(fingerprint)
    assert not registry.check(fingerprint).is_duplicate


def test_empty_text_never_matches_by_content() -> None:
    registry = ProcessedRegistry()
    registry.record(fingerprint_document(b"scan-one", ""))

    assert not registry.check(fingerprint_document(b"scan-two", "")).is_duplicate
    assert registry.snapshot()["normalized_text_hashes"] == []


def test_registry_round_trips_through_cache_file(tmp_path: Path) -> None:
    cache = tmp_path / "processed.json"
    registry = ProcessedRegistry()
    fingerprint = fingerprint_document(b"Work Order: 7", "Work Order: 7")
    registry.record(fingerprint)
    registry.save(cache)

    restored = ProcessedRegistry.load(cache)

    assert restored.snapshot() == registry.snapshot()
    assert restored.check(fingerprint).is_duplicate


def test_load_missing_cache_returns_empty_registry(tmp_path: Path) -> None:
    registry = ProcessedRegistry.load(tmp_path / "missing.json")
    assert registry.snapshot() == {"binary_hashes": [], "normalized_text_hashes": []}


def test_load_rejects_cache_that_is_not_an_object(tmp_path: Path) -> None:
    cache = tmp_path / "processed.json"
    cache.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError, match="not a JSON object"):
        ProcessedRegistry.load(cache)
