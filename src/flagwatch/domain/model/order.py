"""The half-staff order aggregate: one row per jurisdiction."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


def new_id() -> UUID:
    return uuid4()


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(eq=False, kw_only=True)
class Order:
    """Current staff order for a single jurisdiction.

    ``start_date`` and ``end_date`` hold the partial-date text exactly as it
    should be shown (``"December 10"``) or the ``"TBD"`` sentinel. They are
    resolved to calendar dates only when compared against a reference time.
    ``awaiting_start`` marks an order that was parked at full staff because
    its start date had not yet arrived.
    """

    jurisdiction: str
    half_mast: bool = False
    reason: str | None = None
    reason_detail: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    raw_source: str | None = None
    awaiting_start: bool = False
    updated_at: datetime = field(default_factory=_utcnow)
    id: UUID = field(default_factory=new_id)

    def __repr__(self) -> str:
        return (
            f"Order(jurisdiction={self.jurisdiction!r}, half_mast={self.half_mast}, "
            f"start_date={self.start_date!r}, end_date={self.end_date!r})"
        )
