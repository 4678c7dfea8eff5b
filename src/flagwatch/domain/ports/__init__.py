"""Domain port definitions for adapters."""

from __future__ import annotations

from .extraction import Extraction, ExtractionOracle
from .persistence import OrderRepository
from .unit_of_work import (
    OrderRepositories,
    OrderUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "Extraction",
    "ExtractionOracle",
    "OrderRepositories",
    "OrderRepository",
    "OrderUnitOfWork",
    "RepositoryCollection",
    "UnitOfWork",
]
