"""Text normalization helpers shared by adapters and the field extractor."""

from __future__ import annotations

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def normalize_whitespace(text: str) -> str:
    """Collapse repeated whitespace and trim boundaries."""

    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_text(text: str) -> str:
    """Produce stable text for comparisons and hashing."""

    normalized = unicodedata.normalize("NFKC", text)
    return normalize_whitespace(normalized).casefold()


def split_lines(text: str) -> tuple[str, ...]:
    """Split raw document text into trimmed lines, keeping blank ones.

    Blank lines are preserved because next-line rules skip over them by
    position.  Empty input yields an empty tuple.
    """

    if not text:
        return ()
    return tuple(line.strip() for line in _LINE_BREAK_RE.split(text))
