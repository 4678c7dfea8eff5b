"""Sweep that keeps stored half-staff orders in line with the calendar.

Each order is evaluated against ``now``:

1. a concrete start date that has not begun yet parks the order at full staff
   (``awaiting_start``) and nothing else is checked on this pass;
2. otherwise a concrete end date whose last instant has passed expires it;
3. otherwise the order stays as it is. Absent, sentinel or unparseable end
   dates never expire.

Parked orders are re-activated once their start date arrives, unless their
window has already closed by then.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from flagwatch.domain.dates import DateResolver
from flagwatch.domain.model import OrderState

from .plan import ChangeReason, HalfMastChange, SweepResult

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from flagwatch.domain.model import Order
    from flagwatch.domain.ports.persistence import OrderRepository

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    """Evaluate order lifecycles and emit the store mutations they require."""

    resolver: DateResolver = field(default_factory=DateResolver)

    def evaluate(self, order: Order, now: datetime) -> OrderState:
        """Return the lifecycle state of a half-staff order at ``now``."""

        if not order.half_mast:
            return OrderState.UNORDERED
        window = self.resolver.window(order, now)
        if window.start is not None and now < window.start:
            return OrderState.PENDING
        if window.end is not None and now > window.end:
            return OrderState.EXPIRED
        return OrderState.ACTIVE

    def _plan_parked(self, order: Order, now: datetime) -> HalfMastChange | None:
        window = self.resolver.window(order, now)
        if window.start is not None and now < window.start:
            return None
        if window.end is not None and now > window.end:
            return HalfMastChange(
                order_id=order.id,
                jurisdiction=order.jurisdiction,
                half_mast=False,
                awaiting_start=False,
                reason=ChangeReason.LAPSED_BEFORE_START,
            )
        return HalfMastChange(
            order_id=order.id,
            jurisdiction=order.jurisdiction,
            half_mast=True,
            awaiting_start=False,
            reason=ChangeReason.STARTED,
        )

    def plan_order(self, order: Order, now: datetime) -> HalfMastChange | None:
        if not order.half_mast:
            if order.awaiting_start:
                return self._plan_parked(order, now)
            return None

        state = self.evaluate(order, now)
        if state is OrderState.PENDING:
            return HalfMastChange(
                order_id=order.id,
                jurisdiction=order.jurisdiction,
                half_mast=False,
                awaiting_start=True,
                reason=ChangeReason.NOT_STARTED,
            )
        if state is OrderState.EXPIRED:
            return HalfMastChange(
                order_id=order.id,
                jurisdiction=order.jurisdiction,
                half_mast=False,
                awaiting_start=False,
                reason=ChangeReason.EXPIRED,
            )
        return None

    def plan(self, orders: Iterable[Order], now: datetime) -> list[HalfMastChange]:
        """Return the changes needed for ``orders``, in input order."""

        changes: list[HalfMastChange] = []
        for order in orders:
            change = self.plan_order(order, now)
            if change is not None:
                changes.append(change)
        return changes

    def sweep(self, orders: OrderRepository, now: datetime) -> SweepResult:
        """Read candidate orders, plan, and apply the changes through ``orders``."""

        candidates = {order.id: order for order in orders.get_all_half_mast()}
        for order in orders.get_all_awaiting_start():
            candidates.setdefault(order.id, order)

        changes = self.plan(candidates.values(), now)
        for change in changes:
            log.info(
                "Sweep: %s -> %s (%s)",
                change.jurisdiction,
                "HALF" if change.half_mast else "FULL",
                change.reason,
            )
            orders.set_half_mast(
                change.order_id,
                change.half_mast,
                awaiting_start=change.awaiting_start,
            )
        return SweepResult(examined=len(candidates), changes=tuple(changes))
