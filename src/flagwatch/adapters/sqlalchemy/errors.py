"""Translation of SQLAlchemy failures into domain errors."""

from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from flagwatch.domain.errors import StoreUnavailable

if TYPE_CHECKING:
    from collections.abc import Iterator

log = getLogger(__name__)


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Re-raise any SQLAlchemy error raised inside the block as ``StoreUnavailable``."""

    try:
        yield
    except SQLAlchemyError as exc:
        log.error("Order store failure while %s: %s", action, exc)
        raise StoreUnavailable(f"Order store failure while {action}") from exc
