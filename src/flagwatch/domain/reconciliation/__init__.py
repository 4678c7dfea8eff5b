"""Order lifecycle reconciliation."""

from __future__ import annotations

from .engine import ReconciliationEngine
from .plan import ChangeReason, HalfMastChange, SweepResult

__all__ = [
    "ChangeReason",
    "HalfMastChange",
    "ReconciliationEngine",
    "SweepResult",
]
