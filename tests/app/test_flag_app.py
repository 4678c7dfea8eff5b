from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import func, select

from flagwatch.adapters.sqlalchemy import flag_order_table
from flagwatch.app import (
    build_classifier,
    get_all_states,
    get_national_status,
    get_state_status,
    ingest_email,
    sweep_orders,
)
from flagwatch.domain.classification import OracleExtractor, PatternExtractor
from flagwatch.domain.errors import InvalidJurisdictionError
from flagwatch.domain.ingestion import InboundMessage, IngestOutcome
from flagwatch.domain.model import StaffStatus
from tests.helpers.orders import FakeOracle, utc

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine

    from flagwatch.adapters.sqlalchemy import SqlAlchemyOrderUnitOfWork

    UowFactory = Callable[[], SqlAlchemyOrderUnitOfWork]


def _message(subject: str, body: str) -> InboundMessage:
    return InboundMessage(subject=subject, html=f"<p>{body}</p>", sender="alerts@example.org")


def _rows(engine: Engine) -> int:
    with engine.connect() as connection:
        return connection.execute(
            select(func.count()).select_from(flag_order_table)
        ).scalar_one()


def test_build_classifier_without_oracle() -> None:
    classifier = build_classifier(None)

    assert [type(e) for e in classifier.extractors] == [PatternExtractor]


def test_build_classifier_with_oracle() -> None:
    classifier = build_classifier(oracle=FakeOracle())

    assert [type(e) for e in classifier.extractors] == [OracleExtractor, PatternExtractor]


def test_ingest_then_read_state_status(
    sqlite_unit_of_work: UowFactory, sqlite_engine: Engine
) -> None:
    result = ingest_email(
        _message("Texas flags", "In honor of Jane Doe. Lowered December 8 through December 10."),
        classifier=build_classifier(None),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert result.outcome is IngestOutcome.STORED
    status = get_state_status("tx", now=utc(2025, 12, 9), unit_of_work_factory=sqlite_unit_of_work)
    assert status.status is StaffStatus.HALF
    assert status.reason == "Jane Doe"
    assert status.duration == "Until December 10"
    assert _rows(sqlite_engine) == 1


def test_ignored_email_makes_no_changes(
    sqlite_unit_of_work: UowFactory, sqlite_engine: Engine
) -> None:
    result = ingest_email(
        _message("Office closed for holiday", "In honor of Jane Doe."),
        classifier=build_classifier(None),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert result.acknowledgement == "ignored"
    assert _rows(sqlite_engine) == 0


def test_second_email_for_same_state_replaces_first(
    sqlite_unit_of_work: UowFactory, sqlite_engine: Engine
) -> None:
    classifier = build_classifier(oracle=FakeOracle())
    ingest_email(
        _message("Ohio flags", "In honor of Jane Doe."),
        classifier=classifier,
        unit_of_work_factory=sqlite_unit_of_work,
    )
    ingest_email(
        _message("Ohio flags", "In memory of John Roe."),
        classifier=build_classifier(None),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    status = get_state_status("OH", now=utc(2025, 6, 1), unit_of_work_factory=sqlite_unit_of_work)
    assert status.reason == "John Roe"
    assert status.reason_detail is None
    assert _rows(sqlite_engine) == 1


def test_reads_reconcile_expired_orders(sqlite_unit_of_work: UowFactory) -> None:
    ingest_email(
        _message(
            "Flags at half-staff nationwide",
            "In honor of Jane Doe. Flags fly at half-staff December 9 through December 10.",
        ),
        classifier=build_classifier(None),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    uow = sqlite_unit_of_work
    during = get_national_status(now=utc(2025, 12, 10, 12), unit_of_work_factory=uow)
    after = get_national_status(now=utc(2025, 12, 11, 1), unit_of_work_factory=uow)

    assert during.status is StaffStatus.HALF
    assert after.status is StaffStatus.FULL
    assert after.reason == "Standard Protocols"
    assert sweep_orders(now=utc(2025, 12, 12), unit_of_work_factory=uow).changed == 0


def test_pending_order_activates_on_start_date(sqlite_unit_of_work: UowFactory) -> None:
    ingest_email(
        _message("Utah flags", "In honor of Jane Doe, December 20-22."),
        classifier=build_classifier(None),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    parked = sweep_orders(now=utc(2025, 12, 12), unit_of_work_factory=sqlite_unit_of_work)
    before = get_state_status("UT", now=utc(2025, 12, 13), unit_of_work_factory=sqlite_unit_of_work)
    during = get_state_status("UT", now=utc(2025, 12, 21), unit_of_work_factory=sqlite_unit_of_work)

    assert parked.changed == 1
    assert before.status is StaffStatus.FULL
    assert during.status is StaffStatus.HALF
    assert during.reason == "Jane Doe"


def test_get_all_states(sqlite_unit_of_work: UowFactory) -> None:
    ingest_email(
        _message("Alaska", "In memory of the crew."),
        classifier=build_classifier(None),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    states = get_all_states(now=utc(2025, 6, 1), unit_of_work_factory=sqlite_unit_of_work)

    assert len(states) == 51
    flagged = [s.code for s in states if s.flag.status is StaffStatus.HALF]
    assert flagged == ["AK"]


def test_invalid_state_code(sqlite_unit_of_work: UowFactory) -> None:
    with pytest.raises(InvalidJurisdictionError):
        get_state_status("ZZ", unit_of_work_factory=sqlite_unit_of_work)
