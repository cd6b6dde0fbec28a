"""PDF adapter producing line-preserving text for the field extractor."""

from __future__ import annotations

import logging
from pathlib import Path

import pymupdf

from wobridge.ingestion.models import DecodedDocument
from wobridge.ingestion.ocr import OcrStatus, extract_page_text

logger = logging.getLogger(__name__)

_PDF_MAGIC = b"%PDF-"


class PDFAdapter:
    """Decode PDF pages in order, keeping the original line breaks.

    Label/value rules depend on line adjacency, so page text is not
    whitespace-collapsed here.
    """

    def __init__(self, *, ocr_lang: str = "eng") -> None:
        self._ocr_lang = ocr_lang

    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        if path.suffix.lower() == ".pdf":
            return True
        if sniffed_bytes is None:
            return False
        return sniffed_bytes.startswith(_PDF_MAGIC)

    def extract(self, path: Path) -> DecodedDocument:
        warnings: list[str] = []
        page_texts: list[str] = []

        with pymupdf.open(path) as doc:
            page_count = doc.page_count
            for page_index, page in enumerate(doc, start=1):
                result = extract_page_text(page, page_index, lang=self._ocr_lang)
                if result.status == OcrStatus.OCR_FAILED:
                    logger.warning("OCR failed for page %d of %s: %s", page_index, path.name, result.reason)
                    warnings.append(f"page {page_index}: OCR failed")
                elif result.status == OcrStatus.OCR_SKIPPED:
                    warnings.append(f"page {page_index}: scanned page without OCR")
                page_texts.append(result.text.rstrip("\n"))

        return DecodedDocument(
            source_path=str(path),
            text="\n".join(page_texts),
            format_name="pdf",
            page_count=page_count,
            warnings=warnings,
        )
