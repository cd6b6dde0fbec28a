"""Field extraction engine: line pass, body pass, then fallback pass."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Sequence

from wobridge.extraction.normalization import split_lines
from wobridge.extraction.rules import (
    BODY_RULES,
    FALLBACK_RULES,
    LINE_RULES,
    BodyRule,
    FallbackRule,
    LineRule,
    classify_line,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ExtractionResult:
    """Per-pass output of one extraction run.

    ``primary`` holds values from labeled lines and body markers,
    ``fallback`` holds values from corpus-wide patterns for fields the
    primary passes left empty.  ``matched_rules`` lists rule names in the
    order they claimed lines, for diagnostics.
    """

    text: str
    lines: tuple[str, ...]
    primary: dict[str, str] = field(default_factory=dict)
    fallback: dict[str, str] = field(default_factory=dict)
    matched_rules: list[str] = field(default_factory=list)


class FieldExtractor:
    """Apply ordered rule tables to document text.

    Holds only the rule tables, so a single instance can be reused across
    documents; every call builds fresh result state.
    """

    def __init__(
        self,
        *,
        line_rules: Sequence[LineRule] = LINE_RULES,
        body_rules: Sequence[BodyRule] = BODY_RULES,
        fallback_rules: Sequence[FallbackRule] = FALLBACK_RULES,
    ) -> None:
        self._line_rules = tuple(line_rules)
        self._body_rules = tuple(body_rules)
        self._fallback_rules = tuple(fallback_rules)

    def extract(self, text: str) -> ExtractionResult:
        lines = split_lines(text)
        result = ExtractionResult(text=text, lines=lines)

        self._line_pass(result)
        self._body_pass(result)
        self._fallback_pass(result)

        logger.debug(
            "Extracted %d primary and %d fallback fields from %d lines",
            len(result.primary),
            len(result.fallback),
            len(lines),
        )
        return result

    def _line_pass(self, result: ExtractionResult) -> None:
        lines = result.lines
        index = 0
        while index < len(lines):
            line = lines[index]
            rule = classify_line(line, self._line_rules) if line else None
            if rule is None:
                index += 1
                continue

            match = rule.extract(lines, index)
            result.matched_rules.append(rule.name)
            for name, value in match.values.items():
                # First labeled value in the document wins.
                if value and name not in result.primary:
                    result.primary[name] = value
            index += 1 + match.consumed

    def _body_pass(self, result: ExtractionResult) -> None:
        for rule in self._body_rules:
            if rule.field_name in result.primary:
                continue
            value = rule.extract(result.text)
            if value:
                result.primary[rule.field_name] = value

    def _fallback_pass(self, result: ExtractionResult) -> None:
        for rule in self._fallback_rules:
            if rule.field_name in result.primary or rule.field_name in result.fallback:
                continue
            value = rule.search(result.lines)
            if value:
                logger.debug("Fallback rule filled %s", rule.field_name)
                result.fallback[rule.field_name] = value


_DEFAULT_EXTRACTOR = FieldExtractor()


def extract_fields(text: str) -> ExtractionResult:
    """Run the default rule tables over *text*."""

    return _DEFAULT_EXTRACTOR.extract(text)
