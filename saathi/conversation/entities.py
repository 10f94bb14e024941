"""Entity extractors: date-range labels and rupee amounts from raw text.

Both are pure and never raise on odd input.
"""

import re
from typing import Optional

from saathi.schemas.dialog_schema import DateRange

_CURRENCY_PATTERN = re.compile(r"₹?\s*([0-9]+(?:\.[0-9]+)?)")

# Checked in order; the first label whose keyword appears wins.
DATE_RANGE_KEYWORDS: list[tuple[DateRange, tuple[str, ...]]] = [
    (DateRange.TODAY, ("today", "aaj")),
    (DateRange.YESTERDAY, ("yesterday", "kal")),
    (DateRange.LAST_WEEK, ("week", "hafta", "pichle hafta")),
]


def detect_date_range(text: str) -> DateRange:
    """Map an utterance to a date-range label, defaulting to today."""
    lower = text.lower()
    for label, keywords in DATE_RANGE_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return label
    return DateRange.TODAY


def parse_currency(text: str) -> Optional[float]:
    """Pull the first amount out of text like '₹1,200' or '1200.50'.

    Returns None when no number is present.
    """
    match = _CURRENCY_PATTERN.search(text.replace(",", ""))
    if match is None:
        return None
    return float(match.group(1))
