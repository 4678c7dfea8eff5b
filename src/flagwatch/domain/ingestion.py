"""Application service turning inbound emails into stored orders."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from flagwatch.domain.classification import message_text
from flagwatch.domain.model import Order

if TYPE_CHECKING:
    from collections.abc import Callable

    from flagwatch.domain.classification import Classification, TextClassifier
    from flagwatch.domain.ports.unit_of_work import OrderUnitOfWork

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InboundMessage:
    """An email as handed over by the relay: subject plus HTML and/or plain body."""

    subject: str | None
    html: str | None = None
    plain: str | None = None
    sender: str | None = None

    @property
    def text(self) -> str:
        return message_text(html=self.html, plain=self.plain)


class IngestOutcome(StrEnum):
    STORED = "stored"
    IGNORED = "ignored"


@dataclass(frozen=True, slots=True)
class IngestResult:
    outcome: IngestOutcome
    jurisdiction: str | None = None
    order: Order | None = None
    classification: Classification | None = None

    @property
    def acknowledgement(self) -> str:
        """Body returned to the relay; ignored messages are still a success."""

        return "ok" if self.outcome is IngestOutcome.STORED else "ignored"


def order_from_classification(
    classification: Classification,
    *,
    raw_source: str,
) -> Order:
    jurisdiction = classification.scope.jurisdiction
    if jurisdiction is None:
        raise ValueError("Cannot build an order for an unrecognized scope")
    return Order(
        jurisdiction=jurisdiction,
        half_mast=True,
        reason=classification.reason,
        reason_detail=classification.reason_detail,
        start_date=classification.start,
        end_date=classification.end,
        raw_source=raw_source,
    )


def ingest_message(
    message: InboundMessage,
    *,
    classifier: TextClassifier,
    unit_of_work_factory: Callable[[], OrderUnitOfWork],
) -> IngestResult:
    """Classify ``message`` and upsert the resulting order.

    Messages without a subject or without a recognisable jurisdiction are
    acknowledged as ignored and never touch the store. Store failures
    propagate as ``StoreUnavailable``.
    """

    if not message.subject or not message.subject.strip():
        log.info("Message from %s has no subject, ignoring", message.sender)
        return IngestResult(outcome=IngestOutcome.IGNORED)

    text = message.text
    log.info("Ingesting %r from %s (%d characters)", message.subject, message.sender, len(text))
    classification = classifier.classify(message.subject, text)
    if not classification.is_recognized:
        return IngestResult(outcome=IngestOutcome.IGNORED, classification=classification)

    order = order_from_classification(classification, raw_source=text)
    with unit_of_work_factory() as uow:
        stored = uow.repositories.orders.upsert(order)
        uow.commit()

    log.info("Stored half-staff order for %s: %r", stored.jurisdiction, stored.reason)
    return IngestResult(
        outcome=IngestOutcome.STORED,
        jurisdiction=stored.jurisdiction,
        order=stored,
        classification=classification,
    )
