"""Document adapter implementations and contracts."""

import logging

from .base import DocumentAdapter

logger = logging.getLogger(__name__)

try:
    from .pdf_adapter import PDFAdapter
except ImportError:
    PDFAdapter = None
    logger.warning("PDF support unavailable: install 'pymupdf'")

try:
    from .email_adapter import EmailAdapter
except ImportError:
    EmailAdapter = None
    logger.warning("Email support unavailable: install 'beautifulsoup4'")

try:
    from .txt_adapter import TXTAdapter
except ImportError:
    TXTAdapter = None
    logger.warning("TXT support unavailable: install 'charset-normalizer'")


def build_default_adapters() -> dict[str, DocumentAdapter]:
    """Return the default adapter map; order matters, TXT sniffing is the widest."""
    adapters: dict[str, DocumentAdapter] = {}
    if PDFAdapter is not None:
        adapters["pdf"] = PDFAdapter()
    if EmailAdapter is not None:
        adapters["eml"] = EmailAdapter()
    if TXTAdapter is not None:
        adapters["txt"] = TXTAdapter()
    return adapters


__all__ = [
    "DocumentAdapter",
    "EmailAdapter",
    "PDFAdapter",
    "TXTAdapter",
    "build_default_adapters",
]
