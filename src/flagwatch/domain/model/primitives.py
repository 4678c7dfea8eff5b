"""Domain primitives: partial calendar dates without a year."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Final

MONTH_NAMES: Final[tuple[str, ...]] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_MONTH_LOOKUP: Final[dict[str, int]] = {
    **{name.lower(): index for index, name in enumerate(MONTH_NAMES, start=1)},
    **{name[:3].lower(): index for index, name in enumerate(MONTH_NAMES, start=1)},
    "sept": 9,
}

# Feb 29 is accepted here; whether it exists is decided once a year is attached.
_MAX_DAY: Final[tuple[int, ...]] = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

UNDETERMINED_SENTINELS: Final[frozenset[str]] = frozenset(
    {"TBD", "TBA", "UNDETERMINED", "UNKNOWN", "UNTIL FURTHER NOTICE"}
)

_PARTIAL_DATE_RE = re.compile(
    r"^\s*(?P<month>[A-Za-z]+)\.?\s+(?P<day>\d{1,2})(?:st|nd|rd|th)?\s*,?\s*$",
    re.IGNORECASE,
)


def month_number(name: str) -> int | None:
    return _MONTH_LOOKUP.get(name.strip().rstrip(".").lower())


def is_undetermined(value: str | None) -> bool:
    """Return whether ``value`` is one of the "not yet known" sentinels."""

    if value is None:
        return False
    return value.strip().upper() in UNDETERMINED_SENTINELS


@dataclass(frozen=True, order=True)
class PartialDate:
    """A month and day-of-month with no year attached."""

    month: int
    day: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month out of range: {self.month}")
        if not 1 <= self.day <= _MAX_DAY[self.month - 1]:
            raise ValueError(f"Day out of range for {MONTH_NAMES[self.month - 1]}: {self.day}")

    @classmethod
    def parse(cls, text: str) -> PartialDate:
        """Parse ``"December 10"``, ``"dec 10th"`` and similar spellings."""

        match = _PARTIAL_DATE_RE.match(text)
        if match is None:
            raise ValueError(f"Not a partial date: {text!r}")
        month = month_number(match.group("month"))
        if month is None:
            raise ValueError(f"Unknown month name: {match.group('month')!r}")
        return cls(month=month, day=int(match.group("day")))

    def in_year(self, year: int) -> date:
        return date(year, self.month, self.day)

    def __str__(self) -> str:
        return f"{MONTH_NAMES[self.month - 1]} {self.day}"
