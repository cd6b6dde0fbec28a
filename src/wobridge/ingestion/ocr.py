"""Tesseract OCR fallback for scanned work-order pages.

pytesseract and Pillow are soft dependencies imported inside ``_ocr_page()``.
Without a Tesseract binary the first scanned page logs one warning and every
scanned page afterwards returns ``OcrStatus.OCR_SKIPPED`` with whatever
embedded text the page had.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import pymupdf


logger = logging.getLogger(__name__)

# Pages with fewer text characters per pt² than this are treated as scans.
# A Letter page is 612×792 ≈ 485 000 pt², so 0.00005 means < ~25 characters.
DEFAULT_COVERAGE_THRESHOLD = 0.00005

DEFAULT_TESSERACT_LANG = "eng"

# None: not checked yet, True: Tesseract ran, False: binary missing
_tesseract_available: bool | None = None


class OcrStatus(Enum):
    EMBEDDED = "embedded"
    OCR_SUCCESS = "ocr_success"
    OCR_FAILED = "ocr_failed"
    OCR_EMPTY = "ocr_empty"
    OCR_SKIPPED = "ocr_skipped"


@dataclass(slots=True)
class PageOcrResult:
    page_index: int
    status: OcrStatus
    text: str
    reason: str | None = None


def _page_text_coverage(page: pymupdf.Page, text: str) -> float:
    """Return ratio of text character count to page area (chars / pt²)."""
    rect = page.rect
    area = rect.width * rect.height
    if area == 0:
        return 0.0
    return len(text.strip()) / area


def _is_scanned_page(page: pymupdf.Page, text: str, *, threshold: float) -> bool:
    return _page_text_coverage(page, text) < threshold


def _is_tesseract_not_found(exc: Exception) -> bool:
    # Checked by name: pytesseract is not imported at module level.
    if "TesseractNotFoundError" in type(exc).__name__:
        return True
    msg = str(exc).lower()
    return "tesseract is not installed" in msg or "tesseract is not in your path" in msg


def _ocr_page(page: pymupdf.Page, lang: str) -> str:
    """Render *page* at 300 DPI and run Tesseract over it."""
    import io

    import pytesseract
    from PIL import Image

    mat = pymupdf.Matrix(300 / 72, 300 / 72)
    pix = page.get_pixmap(matrix=mat, colorspace=pymupdf.csRGB)
    image = Image.open(io.BytesIO(pix.tobytes("png")))
    # psm 4: single column of variable-size text, keeps label/value rows intact
    return pytesseract.image_to_string(image, lang=lang, config="--oem 3 --psm 4")


def extract_page_text(
    page: pymupdf.Page,
    page_index: int,
    *,
    coverage_threshold: float = DEFAULT_COVERAGE_THRESHOLD,
    lang: str = DEFAULT_TESSERACT_LANG,
) -> PageOcrResult:
    """Return text for one page, running OCR when embedded text is missing."""
    global _tesseract_available

    embedded_text = page.get_text("text")

    if not _is_scanned_page(page, embedded_text, threshold=coverage_threshold):
        return PageOcrResult(page_index=page_index, status=OcrStatus.EMBEDDED, text=embedded_text)

    if _tesseract_available is False:
        return PageOcrResult(page_index=page_index, status=OcrStatus.OCR_SKIPPED, text=embedded_text)

    try:
        ocr_text = _ocr_page(page, lang).strip()
    except Exception as exc:
        if _is_tesseract_not_found(exc):
            _tesseract_available = False
            logger.warning(
                "Tesseract is not installed or not in PATH; OCR disabled for this run. "
                "Scanned work orders will only yield their embedded text."
            )
            return PageOcrResult(page_index=page_index, status=OcrStatus.OCR_SKIPPED, text=embedded_text)
        return PageOcrResult(
            page_index=page_index,
            status=OcrStatus.OCR_FAILED,
            text=embedded_text,
            reason=str(exc),
        )

    _tesseract_available = True

    if not ocr_text:
        return PageOcrResult(
            page_index=page_index,
            status=OcrStatus.OCR_EMPTY,
            text=embedded_text,
            reason="Tesseract returned empty output",
        )

    return PageOcrResult(page_index=page_index, status=OcrStatus.OCR_SUCCESS, text=ocr_text)
