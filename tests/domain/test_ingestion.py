from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from flagwatch.domain.classification import TextClassifier
from flagwatch.domain.errors import StoreUnavailable
from flagwatch.domain.ingestion import InboundMessage, IngestOutcome, ingest_message
from tests.helpers.orders import FakeOrderRepository, FakeUnitOfWork

if TYPE_CHECKING:
    from flagwatch.domain.model import Order

HTML = (
    "<p>Governor Smith orders flags at half-staff in honor of Jane Doe.</p>"
    "<p>Flags will remain lowered December 8-10.</p>"
)


def test_ingest_stores_order() -> None:
    uow = FakeUnitOfWork()

    result = ingest_message(
        InboundMessage(subject="Texas flag alert", html=HTML),
        classifier=TextClassifier(),
        unit_of_work_factory=lambda: uow,
    )

    assert result.outcome is IngestOutcome.STORED
    assert result.acknowledgement == "ok"
    stored = uow.orders.orders["TX"]
    assert stored.half_mast
    assert stored.reason == "Jane Doe"
    assert (stored.start_date, stored.end_date) == ("December 8", "December 10")
    assert stored.raw_source is not None
    assert "<p>" not in stored.raw_source
    assert uow.committed == 1


@pytest.mark.parametrize("subject", [None, "", "Office closed for holiday"])
def test_ignored_messages_never_touch_the_store(subject: str | None) -> None:
    uow = FakeUnitOfWork()

    result = ingest_message(
        InboundMessage(subject=subject, plain="in honor of Jane Doe."),
        classifier=TextClassifier(),
        unit_of_work_factory=lambda: uow,
    )

    assert result.outcome is IngestOutcome.IGNORED
    assert result.acknowledgement == "ignored"
    assert uow.entered == 0
    assert uow.orders.mutations == 0


def test_second_message_overwrites_first() -> None:
    uow = FakeUnitOfWork()
    classifier = TextClassifier()

    ingest_message(
        InboundMessage(subject="Ohio", plain="in honor of Jane Doe."),
        classifier=classifier,
        unit_of_work_factory=lambda: uow,
    )
    ingest_message(
        InboundMessage(subject="Ohio", plain="in memory of John Roe."),
        classifier=classifier,
        unit_of_work_factory=lambda: uow,
    )

    assert list(uow.orders.orders) == ["OH"]
    assert uow.orders.orders["OH"].reason == "John Roe"


class _BrokenRepository(FakeOrderRepository):
    def upsert(self, order: Order) -> Order:
        raise StoreUnavailable("disk full")


def test_store_failures_propagate() -> None:
    uow = FakeUnitOfWork(orders=_BrokenRepository())

    with pytest.raises(StoreUnavailable):
        ingest_message(
            InboundMessage(subject="Ohio", plain="in honor of Jane Doe."),
            classifier=TextClassifier(),
            unit_of_work_factory=lambda: uow,
        )

    assert uow.committed == 0
    assert uow.rolled_back == 1


def test_stored_order_is_logged_with_lazy_arguments(caplog: pytest.LogCaptureFixture) -> None:
    uow = FakeUnitOfWork()

    with caplog.at_level("INFO", logger="flagwatch.domain.ingestion"):
        ingest_message(
            InboundMessage(subject="Texas flag alert", html=HTML),
            classifier=TextClassifier(),
            unit_of_work_factory=lambda: uow,
        )

    stored = [r for r in caplog.records if r.getMessage().startswith("Stored half-staff order")]
    assert len(stored) == 1
    assert stored[0].args == ("TX", "Jane Doe")
