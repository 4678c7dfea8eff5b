"""Extraction of an order's start/end window from free text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from logging import getLogger
from typing import Final

from flagwatch.domain.model.primitives import MONTH_NAMES, PartialDate, month_number

log = getLogger(__name__)

_MONTH: Final[str] = "(" + "|".join(MONTH_NAMES) + ")"
_DAY: Final[str] = r"(\d{1,2})(?:st|nd|rd|th)?\b"
_YEAR: Final[str] = r"(?:,?\s+\d{4})?"

SAME_MONTH_RANGE = re.compile(rf"\b{_MONTH}\s+{_DAY}\s*[-–—]\s*{_DAY}", re.IGNORECASE)
THROUGH_RANGE = re.compile(
    rf"\b{_MONTH}\s+{_DAY}{_YEAR},?\s+(?:through|thru)\s+(?:{_MONTH}\s+)?{_DAY}",
    re.IGNORECASE,
)
SINGLE_DATE = re.compile(rf"\b{_MONTH}\s+{_DAY}", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class DateRange:
    """Canonical partial-date strings; ``None`` means unbounded on that side."""

    start: str | None = None
    end: str | None = None


def _partial(month_name: str, day: str) -> str | None:
    month = month_number(month_name)
    if month is None:
        return None
    try:
        return str(PartialDate(month=month, day=int(day)))
    except ValueError:
        log.warning("Ignoring impossible date %s %s in message text", month_name, day)
        return None


def _same_month_range(text: str) -> DateRange | None:
    match = SAME_MONTH_RANGE.search(text)
    if match is None:
        return None
    month, first, last = match.groups()
    start, end = _partial(month, first), _partial(month, last)
    if start is None or end is None:
        return None
    return DateRange(start=start, end=end)


def _through_range(text: str) -> DateRange | None:
    match = THROUGH_RANGE.search(text)
    if match is None:
        return None
    start_month, first, end_month, last = match.groups()
    start, end = _partial(start_month, first), _partial(end_month or start_month, last)
    if start is None or end is None:
        return None
    return DateRange(start=start, end=end)


def _independent_dates(text: str) -> DateRange:
    found: list[str] = []
    for match in SINGLE_DATE.finditer(text):
        value = _partial(*match.groups())
        if value is not None:
            found.append(value)
        if len(found) == 2:
            break
    if not found:
        return DateRange()
    return DateRange(start=found[0], end=found[1] if len(found) > 1 else None)


def extract_date_range(text: str) -> DateRange:
    """Find the order window in ``text``.

    Explicit ranges ("December 8-10", "December 8 through December 10") are
    preferred. Otherwise the first two "Month D" mentions in document order
    become start and end.
    """

    if not text:
        return DateRange()
    return _same_month_range(text) or _through_range(text) or _independent_dates(text)
