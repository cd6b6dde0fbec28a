"""Ordered extraction rules for work-order documents.

``LINE_RULES`` is evaluated top to bottom for each line and the first rule
whose label matches claims the line.  More specific labels sit above the
generic ones they would otherwise be shadowed by: ``purchase order`` and the
``P.O.`` abbreviation are tested before ``work order``, and the phone and
terms labels before the broad ``location`` label.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Callable, Literal, Sequence

from wobridge.extraction import patterns


@dataclass(frozen=True, slots=True)
class RuleMatch:
    """Values produced by one rule plus the number of following lines it read."""

    values: dict[str, str | None] = field(default_factory=dict)
    consumed: int = 0


Extractor = Callable[[Sequence[str], int], RuleMatch]


@dataclass(frozen=True, slots=True)
class LineRule:
    """Label predicate paired with the extractor run on matching lines."""

    name: str
    label: re.Pattern[str]
    extract: Extractor

    def matches(self, line: str) -> bool:
        return self.label.search(line) is not None


@dataclass(frozen=True, slots=True)
class BodyRule:
    """Marker searched in the full text; one side of the split is the value."""

    field_name: str
    marker: str
    side: Literal["after", "before"]

    def extract(self, text: str) -> str | None:
        match = re.search(re.escape(self.marker), text, re.IGNORECASE)
        if match is None:
            return None
        if self.side == "after":
            value = text[match.end():]
        else:
            value = text[: match.start()]
        return value.strip() or None


@dataclass(frozen=True, slots=True)
class FallbackRule:
    """Corpus-wide pattern used only when the labeled rules found nothing."""

    field_name: str
    pattern: re.Pattern[str]
    group: int = 1

    def search(self, lines: Sequence[str]) -> str | None:
        for line in lines:
            match = self.pattern.search(line)
            if match is None:
                continue
            value = match.group(self.group).strip()
            if value:
                return value
        return None


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------

def value_after(line: str, delimiter: str = ":") -> str | None:
    """Return the trimmed text after the first *delimiter*, or None."""

    if delimiter not in line:
        return None
    _, _, tail = line.partition(delimiter)
    return tail.strip() or None


def next_non_blank(lines: Sequence[str], index: int) -> int | None:
    """Return the index of the first non-blank line after *index*."""

    for cursor in range(index + 1, len(lines)):
        if lines[cursor]:
            return cursor
    return None


def is_labeled_field(line: str) -> bool:
    """True when *line* is another field's ``label: value`` line."""

    return value_after(line) is not None and classify_line(line) is not None


# ---------------------------------------------------------------------------
# Extractor factories
# ---------------------------------------------------------------------------

def same_line(field_name: str, delimiter: str = ":") -> Extractor:
    def _extract(lines: Sequence[str], index: int) -> RuleMatch:
        return RuleMatch({field_name: value_after(lines[index], delimiter)})

    return _extract


def order_number(field_name: str, label: re.Pattern[str]) -> Extractor:
    """Order number from a labeled line.

    A number-like value after ``:`` wins.  Otherwise a number sitting right
    after the label is used (``Work Order # 12345``, ``New Work Order 12345 -
    Store 55``), and only then any other text after ``:``.
    """

    def _extract(lines: Sequence[str], index: int) -> RuleMatch:
        line = lines[index]
        value = value_after(line)
        if value is not None and patterns.ORDER_NUMBER_VALUE_RE.fullmatch(value):
            return RuleMatch({field_name: value.lstrip("#").strip()})

        found = label.search(line)
        direct = patterns.LABEL_NUMBER_RE.match(line, found.end()) if found else None
        if direct is not None:
            return RuleMatch({field_name: direct.group(1)})
        return RuleMatch({field_name: value})

    return _extract


def flat_rate_price(lines: Sequence[str], index: int) -> RuleMatch:
    line = lines[index]
    value = value_after(line, "$") or value_after(line, ":")
    return RuleMatch({"flat_rate_price": value})


def remit_to_email(lines: Sequence[str], index: int) -> RuleMatch:
    """Accept an email on the label line or on the next non-blank line."""

    same = patterns.EMAIL_RE.search(lines[index])
    if same is not None:
        return RuleMatch({"pm_email": same.group(0)})

    candidate = next_non_blank(lines, index)
    if candidate is None:
        return RuleMatch({"pm_email": None})
    match = patterns.EMAIL_RE.search(lines[candidate])
    if match is None:
        return RuleMatch({"pm_email": None})
    return RuleMatch({"pm_email": match.group(0)}, consumed=candidate - index)


def remarks(lines: Sequence[str], index: int) -> RuleMatch:
    inline = value_after(lines[index])
    if inline is not None:
        return RuleMatch({"notes": inline})

    candidate = next_non_blank(lines, index)
    if candidate is None or is_labeled_field(lines[candidate]):
        return RuleMatch({"notes": None})
    return RuleMatch({"notes": lines[candidate]}, consumed=candidate - index)


def not_to_exceed_item(lines: Sequence[str], index: int) -> RuleMatch:
    """``NTE:`` line is the description; the next line holds cost, qty, total."""

    values: dict[str, str | None] = {
        "item_description": lines[index] or None,
        "unit_cost": None,
        "quantity": None,
        "total_cost": None,
    }
    following = index + 1
    if following >= len(lines) or not lines[following] or is_labeled_field(lines[following]):
        return RuleMatch(values)

    tokens = lines[following].split()
    for name, token in zip(("unit_cost", "quantity", "total_cost"), tokens):
        values[name] = token
    return RuleMatch(values, consumed=1)


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------

LINE_RULES: tuple[LineRule, ...] = (
    LineRule("nte_item", patterns.NTE_LABEL_RE, not_to_exceed_item),
    LineRule("remit_to", patterns.REMIT_TO_LABEL_RE, remit_to_email),
    LineRule(
        "purchase_order",
        patterns.PURCHASE_ORDER_LABEL_RE,
        order_number("purchase_order", patterns.PURCHASE_ORDER_LABEL_RE),
    ),
    LineRule(
        "po_abbreviation",
        patterns.PO_ABBREV_LABEL_RE,
        order_number("purchase_order", patterns.PO_ABBREV_LABEL_RE),
    ),
    LineRule("work_order", patterns.WORK_ORDER_LABEL_RE, order_number("work_order", patterns.WORK_ORDER_LABEL_RE)),
    LineRule("scheduled_date", patterns.SCHEDULED_DATE_LABEL_RE, same_line("scheduled_date")),
    LineRule("check_in_phone", patterns.CHECK_IN_PHONE_LABEL_RE, same_line("check_in_phone")),
    LineRule("backup_phone", patterns.BACKUP_PHONE_LABEL_RE, same_line("backup_phone")),
    LineRule("flat_rate_price", patterns.FLAT_RATE_PRICE_LABEL_RE, flat_rate_price),
    LineRule("ordered_by", patterns.ORDERED_BY_LABEL_RE, same_line("ordered_by")),
    LineRule("shipping_terms", patterns.SHIPPING_TERMS_LABEL_RE, same_line("shipping_terms")),
    LineRule("payment_terms", patterns.PAYMENT_TERMS_LABEL_RE, same_line("payment_terms")),
    LineRule("location", patterns.LOCATION_LABEL_RE, same_line("location")),
    LineRule("city", patterns.CITY_LABEL_RE, same_line("city")),
    LineRule("state", patterns.STATE_LABEL_RE, same_line("state")),
    LineRule("remarks", patterns.REMARKS_LABEL_RE, remarks),
)

BODY_RULES: tuple[BodyRule, ...] = (
    BodyRule("instructions", patterns.INSTRUCTIONS_MARKER, "after"),
    BodyRule("scope_of_work", patterns.DELIVERABLES_MARKER, "before"),
)

FALLBACK_RULES: tuple[FallbackRule, ...] = (
    FallbackRule("state", patterns.STATE_FALLBACK_RE),
    FallbackRule("city", patterns.CITY_FALLBACK_RE),
    FallbackRule("work_order", patterns.WORK_ORDER_FALLBACK_RE),
    FallbackRule("purchase_order", patterns.PURCHASE_ORDER_FALLBACK_RE),
    FallbackRule("scheduled_date", patterns.DATE_FALLBACK_RE),
)


def classify_line(line: str, rules: Sequence[LineRule] = LINE_RULES) -> LineRule | None:
    """Return the first rule whose label matches *line*."""

    for rule in rules:
        if rule.matches(line):
            return rule
    return None
