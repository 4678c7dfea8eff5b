"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, cast

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite

from flagwatch.adapters.sqlalchemy.errors import store_errors
from flagwatch.adapters.sqlalchemy.mappings import flag_order_table
from flagwatch.domain.dates import utcnow
from flagwatch.domain.model import Order

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy import Select
    from sqlalchemy.orm import Session

    from flagwatch.domain.dates import Clock

MUTABLE_COLUMNS: Final[tuple[str, ...]] = (
    "half_mast",
    "reason",
    "reason_detail",
    "start_date",
    "end_date",
    "raw_source",
)

_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class SqlAlchemyOrderRepository:
    """Orders keyed by jurisdiction, one row each."""

    def __init__(self, session: Session, *, clock: Clock = utcnow) -> None:
        self.session = session
        self._clock = clock

    def get_latest(self, jurisdiction: str) -> Order | None:
        stmt = (
            self._select()
            .where(flag_order_table.c.jurisdiction == jurisdiction)
            .order_by(flag_order_table.c.updated_at.desc())
            .limit(1)
        )
        with store_errors(f"reading order for {jurisdiction}"):
            return self.session.execute(stmt).scalars().first()

    def get_all(self) -> Sequence[Order]:
        stmt = self._select().order_by(flag_order_table.c.jurisdiction)
        with store_errors("reading all orders"):
            return self.session.execute(stmt).scalars().all()

    def get_all_half_mast(self) -> Sequence[Order]:
        stmt = (
            self._select()
            .where(flag_order_table.c.half_mast.is_(True))
            .order_by(flag_order_table.c.jurisdiction)
        )
        with store_errors("reading half-staff orders"):
            return self.session.execute(stmt).scalars().all()

    def get_all_awaiting_start(self) -> Sequence[Order]:
        stmt = (
            self._select()
            .where(flag_order_table.c.awaiting_start.is_(True))
            .order_by(flag_order_table.c.jurisdiction)
        )
        with store_errors("reading orders awaiting their start date"):
            return self.session.execute(stmt).scalars().all()

    def upsert(self, order: Order) -> Order:
        """Insert the order or overwrite the existing row for its jurisdiction."""

        values: dict[str, Any] = {name: getattr(order, name) for name in MUTABLE_COLUMNS}
        values["awaiting_start"] = False
        values["updated_at"] = self._clock()

        with store_errors(f"storing order for {order.jurisdiction}"):
            insert = _UPSERT_INSERTS.get(self.session.get_bind().dialect.name)
            if insert is None:
                self._upsert_portable(order, values)
            else:
                stmt = insert(flag_order_table).values(
                    id=order.id, jurisdiction=order.jurisdiction, **values
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=[flag_order_table.c.jurisdiction],
                    set_=values,
                )
                self.session.execute(stmt)

        stored = self.get_latest(order.jurisdiction)
        if stored is None:  # pragma: no cover - the row was just written
            raise RuntimeError(f"Upserted order for {order.jurisdiction} not found")
        return stored

    def set_half_mast(self, order_id: UUID, value: bool, *, awaiting_start: bool = False) -> None:
        stmt = (
            update(Order)
            .where(flag_order_table.c.id == order_id)
            .values(half_mast=value, awaiting_start=awaiting_start, updated_at=self._clock())
        )
        with store_errors(f"updating order {order_id}"):
            self.session.execute(stmt)

    def _upsert_portable(self, order: Order, values: dict[str, Any]) -> None:
        existing = self.session.execute(
            self._select().where(flag_order_table.c.jurisdiction == order.jurisdiction)
        ).scalar_one_or_none()
        if existing is None:
            self.session.add(
                Order(id=order.id, jurisdiction=order.jurisdiction, **values),
            )
        else:
            for name, value in values.items():
                setattr(existing, name, value)
        self.session.flush()

    @staticmethod
    def _select() -> Select[tuple[Order]]:
        return cast("Select[tuple[Order]]", select(Order).execution_options(populate_existing=True))


if TYPE_CHECKING:
    from flagwatch.domain.ports.persistence import OrderRepository

    _session_stub = cast("Session", object())
    _repo_check: OrderRepository = SqlAlchemyOrderRepository(_session_stub)
