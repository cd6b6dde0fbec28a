from __future__ import annotations

from pathlib import Path

import pymupdf
import pytest

from wobridge.ingestion import ocr
from wobridge.ingestion.adapters.pdf_adapter import PDFAdapter


def _build_pdf(path: Path, pages: list[list[str]]) -> None:
    doc = pymupdf.open()
    for lines in pages:
        page = doc.new_page()
        for offset, line in enumerate(lines):
            if line:
                page.insert_text((72, 72 + offset * 18), line)
    doc.save(str(path))
    doc.close()


def test_pdf_adapter_keeps_line_breaks_and_page_order(tmp_path: Path) -> None:
    pdf_path = tmp_path / "work-order.pdf"
    _build_pdf(
        pdf_path,
        [
            ["Work Order: 12345", "Purchase Order: 98765", "Location: 200 Peachtree St, Atlanta, GA"],
            ["Remarks: Bring a ladder for the lobby fixtures"],
        ],
    )

    adapter = PDFAdapter()
    document = adapter.extract(pdf_path)
    lines = [line.strip() for line in document.text.splitlines() if line.strip()]

    assert document.format_name == "pdf"
    assert document.page_count == 2
    assert document.warnings == []
    assert lines == [
        "Work Order: 12345",
        "Purchase Order: 98765",
        "Location: 200 Peachtree St, Atlanta, GA",
        "Remarks: Bring a ladder for the lobby fixtures",
    ]


def test_pdf_adapter_supports_suffix_or_magic(tmp_path: Path) -> None:
    adapter = PDFAdapter()

    assert adapter.supports(tmp_path / "a.PDF")
    assert adapter.supports(tmp_path / "upload", b"%PDF-1.7\n")
    assert not adapter.supports(tmp_path / "notes.txt", b"Work Order: 1")
    assert not adapter.supports(tmp_path / "upload")


def test_pdf_adapter_flags_scanned_page_without_ocr(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(ocr, "_tesseract_available", False)
    pdf_path = tmp_path / "scan.pdf"
    _build_pdf(pdf_path, [[]])

    document = PDFAdapter().extract(pdf_path)

    assert document.text == ""
    assert document.warnings == ["page 1: scanned page without OCR"]
