"""Port for the best-effort text extraction oracle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class Extraction:
    """Who or what an order honors, plus an optional short elaboration."""

    reason: str
    reason_detail: str | None = None


@runtime_checkable
class ExtractionOracle(Protocol):
    """Callable port summarising order text.

    Implementations raise ``ExtractionOracleUnavailable`` for every kind of
    failure (unreachable, rate-limited, malformed reply).
    """

    def __call__(self, text: str) -> Extraction: ...


__all__ = ["Extraction", "ExtractionOracle"]
