"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ScopeKind(StrEnum):
    NATIONAL = "national"
    STATE = "state"
    UNRECOGNIZED = "unrecognized"


class OrderState(StrEnum):
    """Lifecycle state of an order evaluated against a reference time."""

    UNORDERED = "unordered"
    PENDING = "pending"
    ACTIVE = "active"
    EXPIRED = "expired"


class StaffStatus(StrEnum):
    FULL = "FULL"
    HALF = "HALF"
