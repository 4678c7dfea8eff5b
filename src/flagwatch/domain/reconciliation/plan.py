"""Change records produced by the reconciliation sweep."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID


class ChangeReason(StrEnum):
    NOT_STARTED = "not_started"
    EXPIRED = "expired"
    STARTED = "started"
    LAPSED_BEFORE_START = "lapsed_before_start"


@dataclass(frozen=True, slots=True, kw_only=True)
class HalfMastChange:
    """Targeted flip of one order's staff state."""

    order_id: UUID
    jurisdiction: str
    half_mast: bool
    awaiting_start: bool
    reason: ChangeReason


@dataclass(frozen=True, slots=True)
class SweepResult:
    examined: int
    changes: tuple[HalfMastChange, ...] = ()

    @property
    def changed(self) -> int:
        return len(self.changes)
