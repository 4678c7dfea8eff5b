"""Reusable builders and in-memory fakes for order tests."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal, Self

from flagwatch.domain.model import Order
from flagwatch.domain.ports.extraction import Extraction
from flagwatch.domain.ports.unit_of_work import OrderRepositories

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType
    from uuid import UUID


def make_order(
    jurisdiction: str = "national",
    *,
    half_mast: bool = True,
    start_date: str | None = None,
    end_date: str | None = None,
    reason: str | None = "Jane Doe",
    reason_detail: str | None = None,
    awaiting_start: bool = False,
) -> Order:
    return Order(
        jurisdiction=jurisdiction,
        half_mast=half_mast,
        reason=reason,
        reason_detail=reason_detail,
        start_date=start_date,
        end_date=end_date,
        awaiting_start=awaiting_start,
        raw_source="Flags are to be flown at half-staff.",
    )


def utc(
    year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0
) -> datetime:
    return datetime(year, month, day, hour, minute, second, tzinfo=UTC)


@dataclass
class FakeOrderRepository:
    """In-memory order store keyed by jurisdiction."""

    orders: dict[str, Order] = field(default_factory=dict)
    upserts: int = 0
    updates: list[tuple[UUID, bool, bool]] = field(default_factory=list)

    def get_latest(self, jurisdiction: str) -> Order | None:
        return self.orders.get(jurisdiction)

    def get_all(self) -> Sequence[Order]:
        return [self.orders[key] for key in sorted(self.orders)]

    def get_all_half_mast(self) -> Sequence[Order]:
        return [order for order in self.get_all() if order.half_mast]

    def get_all_awaiting_start(self) -> Sequence[Order]:
        return [order for order in self.get_all() if order.awaiting_start]

    def upsert(self, order: Order) -> Order:
        self.upserts += 1
        existing = self.orders.get(order.jurisdiction)
        stored = replace(order, awaiting_start=False)
        if existing is not None:
            stored.id = existing.id
        self.orders[order.jurisdiction] = stored
        return stored

    def set_half_mast(self, order_id: UUID, value: bool, *, awaiting_start: bool = False) -> None:
        self.updates.append((order_id, value, awaiting_start))
        for order in self.orders.values():
            if order.id == order_id:
                order.half_mast = value
                order.awaiting_start = awaiting_start

    @property
    def mutations(self) -> int:
        return self.upserts + len(self.updates)


class FakeUnitOfWork:
    def __init__(self, orders: FakeOrderRepository | None = None) -> None:
        self.orders = orders or FakeOrderRepository()
        self.repositories = OrderRepositories(orders=self.orders)
        self.entered = 0
        self.committed = 0
        self.rolled_back = 0

    def __enter__(self) -> Self:
        self.entered += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.committed += 1

    def rollback(self) -> None:
        self.rolled_back += 1


@dataclass
class FakeOracle:
    """Extraction oracle returning a canned answer or raising a canned error."""

    answer: Extraction | None = field(
        default_factory=lambda: Extraction(reason="Jane Doe", reason_detail="Former Senator")
    )
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    def __call__(self, text: str) -> Extraction:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        assert self.answer is not None
        return self.answer
