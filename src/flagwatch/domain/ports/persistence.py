"""Ports for persisting orders."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from flagwatch.domain.model import Order


@runtime_checkable
class OrderRepository(Protocol):
    """Persistence contract for orders keyed by jurisdiction.

    Implementations raise ``StoreUnavailable`` when the backing store fails.
    """

    def get_latest(self, jurisdiction: str) -> Order | None: ...

    def get_all(self) -> Sequence[Order]: ...

    def get_all_half_mast(self) -> Sequence[Order]: ...

    def get_all_awaiting_start(self) -> Sequence[Order]: ...

    def upsert(self, order: Order) -> Order:
        """Insert or overwrite every mutable field of the row for ``order.jurisdiction``."""
        ...

    def set_half_mast(
        self, order_id: UUID, value: bool, *, awaiting_start: bool = False
    ) -> None: ...
