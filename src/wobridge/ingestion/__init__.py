"""Document decoding interfaces."""

from .dedupe import ProcessedRegistry
from .models import DecodedDocument
from .reader import DocumentDecodeError, DocumentReader, ReadResult, build_default_reader

__all__ = [
    "DecodedDocument",
    "DocumentDecodeError",
    "DocumentReader",
    "ProcessedRegistry",
    "ReadResult",
    "build_default_reader",
]
