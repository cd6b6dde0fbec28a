"""Named pattern library for work-order field extraction.

Label patterns identify which field a line carries; value and fallback
patterns pull the field out.  Label patterns are case-insensitive, the
fallback tokens (``, GA``, ``WO 123``) are case-sensitive on purpose.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Label patterns (line pass)
# ---------------------------------------------------------------------------

PURCHASE_ORDER_LABEL_RE = re.compile(r"purchase\s+order", re.IGNORECASE)

# "P.O.", "PO #", "PO No", "PO Number"; never "PO Box" or "P.O. Box"
PO_ABBREV_LABEL_RE = re.compile(
    r"(?<![A-Za-z])(?:p\.\s?o\.(?!\s*box\b)|po\s*#|po\s+(?:no\.?|number)\b)",
    re.IGNORECASE,
)

WORK_ORDER_LABEL_RE = re.compile(r"work\s+order", re.IGNORECASE)
SCHEDULED_DATE_LABEL_RE = re.compile(r"scheduled\s+date", re.IGNORECASE)
NTE_LABEL_RE = re.compile(r"\bNTE\s*:", re.IGNORECASE)
REMIT_TO_LABEL_RE = re.compile(r"remit\s+all\s+invoices\s+to", re.IGNORECASE)
LOCATION_LABEL_RE = re.compile(r"location", re.IGNORECASE)
CITY_LABEL_RE = re.compile(r"\bcity\s*:", re.IGNORECASE)
CHECK_IN_PHONE_LABEL_RE = re.compile(r"check-?in\s+via\s+store\s+phone", re.IGNORECASE)
BACKUP_PHONE_LABEL_RE = re.compile(r"ivr\s+backup\s+check-?in", re.IGNORECASE)
FLAT_RATE_PRICE_LABEL_RE = re.compile(r"flat\s+rate\s+price", re.IGNORECASE)
ORDERED_BY_LABEL_RE = re.compile(r"ordered\s+by", re.IGNORECASE)
SHIPPING_TERMS_LABEL_RE = re.compile(r"shipping\s+terms", re.IGNORECASE)
PAYMENT_TERMS_LABEL_RE = re.compile(r"payment\s+terms", re.IGNORECASE)
STATE_LABEL_RE = re.compile(r"\bstate\s*:", re.IGNORECASE)
REMARKS_LABEL_RE = re.compile(r"remarks", re.IGNORECASE)

# ---------------------------------------------------------------------------
# Value patterns
# ---------------------------------------------------------------------------

# Number directly after an order label: "Work Order # 12345", "P.O. 4455-01",
# "Work Order 12345 - Store 55".  Matched from the end of the label.
LABEL_NUMBER_RE = re.compile(r"\s*(?:no\.?|number|num\.?)?\s*[#:]?\s*(\d[\d-]*)\b", re.IGNORECASE)

# A whole value that reads as an order number: "12345", "#12345", "8800-01"
ORDER_NUMBER_VALUE_RE = re.compile(r"#?\s*\d[\d-]*")

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

# ---------------------------------------------------------------------------
# Body markers (full-text pass)
# ---------------------------------------------------------------------------

INSTRUCTIONS_MARKER = "instructions:"
DELIVERABLES_MARKER = "deliverables"

# ---------------------------------------------------------------------------
# Fallback patterns (corpus-wide)
# ---------------------------------------------------------------------------

STATE_FALLBACK_RE = re.compile(r",\s*([A-Z]{2})\b")

# Capitalized words right before ", ST": "12 Main St, Atlanta, GA", "in San Jose, CA"
CITY_FALLBACK_RE = re.compile(r"\b([A-Z][A-Za-z.'-]*(?:\s+[A-Z][A-Za-z.'-]*)*),\s*[A-Z]{2}\b")

WORK_ORDER_FALLBACK_RE = re.compile(r"\b(?:WO|W\.O\.)\s*(?:#|:|No\.?)?\s*(\d{3,})\b")
PURCHASE_ORDER_FALLBACK_RE = re.compile(r"\bPO\s*(?:#|:|No\.?)?\s*(\d{3,})\b")
DATE_FALLBACK_RE = re.compile(r"\b(\d{1,2}/\d{1,2}/(?:\d{4}|\d{2}))\b")
