from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from flagwatch.domain.dates import DateResolver, parse_partial_date
from flagwatch.domain.errors import DateParseFailure
from flagwatch.domain.model import PartialDate
from tests.helpers.orders import make_order, utc


def test_partial_date_parses_common_spellings() -> None:
    assert PartialDate.parse("December 10") == PartialDate(month=12, day=10)
    assert PartialDate.parse("dec 10th") == PartialDate(month=12, day=10)
    assert PartialDate.parse("Sept. 3") == PartialDate(month=9, day=3)
    assert str(PartialDate.parse("march 1st")) == "March 1"


def test_partial_date_rejects_impossible_days() -> None:
    with pytest.raises(ValueError, match="Day out of range"):
        PartialDate(month=4, day=31)
    assert PartialDate(month=2, day=29).day == 29


def test_parse_partial_date_raises_domain_error() -> None:
    with pytest.raises(DateParseFailure) as excinfo:
        parse_partial_date("next Tuesday")

    assert excinfo.value.value == "next Tuesday"
    assert isinstance(excinfo.value, ValueError)


def test_resolve_uses_reference_year() -> None:
    resolver = DateResolver()

    assert resolver.resolve("March 3", utc(2025, 3, 1)) == date(2025, 3, 3)


def test_resolve_wraps_to_previous_year_when_far_in_future() -> None:
    resolver = DateResolver()

    assert resolver.resolve("December 10", utc(2025, 1, 15)) == date(2024, 12, 10)


def test_resolve_keeps_dates_within_six_months() -> None:
    resolver = DateResolver()

    assert resolver.resolve("June 1", utc(2025, 1, 15)) == date(2025, 6, 1)
    assert resolver.resolve("January 10", utc(2025, 12, 20)) == date(2025, 1, 10)


@pytest.mark.parametrize("value", [None, "", "  ", "TBD", "tba", "Until further notice"])
def test_resolve_treats_missing_and_sentinels_as_unconstrained(value: str | None) -> None:
    assert DateResolver().resolve(value, utc(2025, 1, 15)) is None


def test_resolve_logs_and_ignores_garbage(caplog: pytest.LogCaptureFixture) -> None:
    assert DateResolver().resolve("sometime soon", utc(2025, 1, 15)) is None
    assert "Ignoring date" in caplog.text


def test_resolve_ignores_feb_29_outside_leap_year() -> None:
    resolver = DateResolver()

    assert resolver.resolve("February 29", utc(2025, 3, 1)) is None
    assert resolver.resolve("February 29", utc(2024, 3, 1)) == date(2024, 2, 29)


def test_resolve_rejects_naive_reference() -> None:
    with pytest.raises(ValueError, match="timezone"):
        DateResolver().resolve("March 3", datetime(2025, 3, 1))  # noqa: DTZ001


def test_window_spans_whole_days() -> None:
    resolver = DateResolver()
    order = make_order(start_date="December 8", end_date="December 10")

    window = resolver.window(order, utc(2025, 12, 9))

    assert window.start == utc(2025, 12, 8)
    assert window.end is not None
    assert window.end.date() == date(2025, 12, 10)
    assert (window.end.hour, window.end.minute, window.end.second) == (23, 59, 59)


def test_window_honours_configured_timezone() -> None:
    eastern = ZoneInfo("America/New_York")
    resolver = DateResolver(timezone=eastern)
    order = make_order(end_date="December 10")

    window = resolver.window(order, utc(2025, 12, 11, 3, 0))

    assert window.start is None
    assert window.end is not None
    assert window.end.tzinfo == eastern
    assert utc(2025, 12, 11, 3, 0) < window.end


def test_window_across_new_year_resolves_end_into_past_january() -> None:
    # Only backwards wrapping exists, so "January 3" seen on Dec 29 is the
    # January already behind us.
    resolver = DateResolver()
    reference = utc(2025, 12, 29, 12)

    assert resolver.resolve("December 28", reference) == date(2025, 12, 28)
    assert resolver.resolve("January 3", reference) == date(2025, 1, 3)
