"""Domain model: orders, partial dates and jurisdiction reference data."""

from __future__ import annotations

from .enums import OrderState, ScopeKind, StaffStatus
from .jurisdictions import (
    NATIONAL,
    STATE_CODES,
    STATES,
    STATES_BY_CODE,
    Jurisdiction,
    normalize_state_code,
    state_name,
)
from .order import Order
from .primitives import (
    MONTH_NAMES,
    PartialDate,
    is_undetermined,
)

__all__ = [
    "MONTH_NAMES",
    "NATIONAL",
    "STATES",
    "STATES_BY_CODE",
    "STATE_CODES",
    "Jurisdiction",
    "Order",
    "OrderState",
    "PartialDate",
    "ScopeKind",
    "StaffStatus",
    "is_undetermined",
    "normalize_state_code",
    "state_name",
]
