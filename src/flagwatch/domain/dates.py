"""Resolution of year-less "Month Day" references into calendar dates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, tzinfo
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from dateutil.relativedelta import relativedelta

from flagwatch.domain.errors import DateParseFailure
from flagwatch.domain.model.primitives import PartialDate, is_undetermined

if TYPE_CHECKING:
    from flagwatch.domain.model import Order

log = getLogger(__name__)

# A resolved date further than this past the reference belongs to last year.
YEAR_WRAP_THRESHOLD = relativedelta(months=6)


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)


def parse_partial_date(value: str) -> PartialDate:
    """Parse a stored partial date, raising :class:`DateParseFailure` on bad input."""

    try:
        return PartialDate.parse(value)
    except ValueError as exc:
        raise DateParseFailure(f"Unparseable partial date: {value!r}", value=value) from exc


@dataclass(frozen=True, slots=True)
class OrderWindow:
    """First and last instant an order is in effect; ``None`` means unbounded."""

    start: datetime | None
    end: datetime | None


@dataclass(frozen=True, slots=True)
class DateResolver:
    """Attach a year to partial dates relative to a reference time."""

    timezone: tzinfo = UTC

    def localize(self, reference: datetime) -> datetime:
        if reference.tzinfo is None:
            raise ValueError("Reference time must include timezone information")
        return reference.astimezone(self.timezone)

    def resolve(self, partial: str | None, reference: datetime) -> date | None:
        """Return the concrete date for ``partial`` or ``None`` when unconstrained.

        Absent values, the undetermined sentinels and unparseable text all
        resolve to ``None``; callers treat that as "no constraint".
        """

        if partial is None or not partial.strip() or is_undetermined(partial):
            return None
        local_reference = self.localize(reference)
        try:
            parsed = parse_partial_date(partial)
            candidate = parsed.in_year(local_reference.year)
            if self.start_of_day(candidate) > local_reference + YEAR_WRAP_THRESHOLD:
                candidate = parsed.in_year(local_reference.year - 1)
        except DateParseFailure as exc:
            log.warning("Ignoring date %r: %s", exc.value, exc)
            return None
        except ValueError:
            # Feb 29 outside a leap year
            log.warning("Ignoring date %r: no such day near %s", partial, local_reference.date())
            return None
        return candidate

    def start_of_day(self, value: date) -> datetime:
        return datetime.combine(value, time.min, tzinfo=self.timezone)

    def end_of_day(self, value: date) -> datetime:
        return datetime.combine(value, time.max, tzinfo=self.timezone)

    def window(self, order: Order, reference: datetime) -> OrderWindow:
        start = self.resolve(order.start_date, reference)
        end = self.resolve(order.end_date, reference)
        return OrderWindow(
            start=self.start_of_day(start) if start is not None else None,
            end=self.end_of_day(end) if end is not None else None,
        )


__all__ = [
    "YEAR_WRAP_THRESHOLD",
    "Clock",
    "DateResolver",
    "OrderWindow",
    "parse_partial_date",
    "utcnow",
]
