"""SQLAlchemy adapter package for Flagwatch."""

from __future__ import annotations

from .mappings import flag_order_table, mapper_registry, start_mappers
from .repositories import SqlAlchemyOrderRepository
from .unit_of_work import (
    SqlAlchemyOrderUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyOrderRepository",
    "SqlAlchemyOrderUnitOfWork",
    "StartupError",
    "configured_engine",
    "flag_order_table",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
