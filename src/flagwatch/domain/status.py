"""Projection of stored orders into the public flag status view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from flagwatch.domain.classification import placeholder_reason
from flagwatch.domain.model import (
    NATIONAL,
    STATES,
    ScopeKind,
    StaffStatus,
    is_undetermined,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from flagwatch.domain.model import Order

FULL_STAFF_REASON: Final[str] = "Standard Protocols"
FULL_STAFF_DURATION: Final[str] = "Indefinite"
OPEN_ENDED_DURATION: Final[str] = "Until further notice"


@dataclass(frozen=True, slots=True)
class FlagStatus:
    status: StaffStatus
    reason: str
    duration: str
    reason_detail: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return {
            "status": self.status.value,
            "reason": self.reason,
            "reason_detail": self.reason_detail,
            "duration": self.duration,
        }


@dataclass(frozen=True, slots=True)
class StateFlagStatus:
    code: str
    name: str
    flag: FlagStatus

    def as_dict(self) -> dict[str, str | None]:
        return {"code": self.code, "name": self.name, **self.flag.as_dict()}


FULL_STAFF: Final[FlagStatus] = FlagStatus(
    status=StaffStatus.FULL,
    reason=FULL_STAFF_REASON,
    duration=FULL_STAFF_DURATION,
)


def _text(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def duration_text(end_date: str | None) -> str:
    end = _text(end_date)
    if end is None or is_undetermined(end):
        return OPEN_ENDED_DURATION
    return f"Until {end}"


def project(order: Order | None, *, jurisdiction: str | None = None) -> FlagStatus:
    """Render ``order`` (already swept) as a :class:`FlagStatus`.

    A missing order is full staff. ``jurisdiction`` picks the placeholder
    reason when the order is absent or carries no reason.
    """

    if order is None or not order.half_mast:
        return FULL_STAFF
    key = jurisdiction or order.jurisdiction
    scope_kind = ScopeKind.NATIONAL if key == NATIONAL else ScopeKind.STATE
    return FlagStatus(
        status=StaffStatus.HALF,
        reason=_text(order.reason) or placeholder_reason(scope_kind),
        reason_detail=_text(order.reason_detail),
        duration=duration_text(order.end_date),
    )


def project_all_states(orders: Iterable[Order]) -> list[StateFlagStatus]:
    """Merge stored state orders with the static table of all 51 jurisdictions."""

    by_code = {order.jurisdiction: order for order in orders if order.jurisdiction != NATIONAL}
    return [
        StateFlagStatus(
            code=state.code,
            name=state.name,
            flag=project(by_code.get(state.code), jurisdiction=state.code),
        )
        for state in STATES
    ]
