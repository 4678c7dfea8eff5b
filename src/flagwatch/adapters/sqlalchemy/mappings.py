"""SQLAlchemy mapping metadata for the Flagwatch domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Index,
    String,
    Table,
    Text,
    TypeDecorator,
    Uuid,
    false,
    orm,
)
from sqlalchemy.orm.exc import UnmappedClassError

from flagwatch.domain.model import Order

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

flag_order_table = Table(
    "flag_order",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("jurisdiction", String(16), nullable=False, unique=True),
    Column("half_mast", Boolean, nullable=False, server_default=false()),
    Column("awaiting_start", Boolean, nullable=False, server_default=false()),
    Column("reason", String(255), nullable=True),
    Column("reason_detail", String(255), nullable=True),
    Column("start_date", String(32), nullable=True),
    Column("end_date", String(32), nullable=True),
    Column("raw_source", Text, nullable=True),
    Column("updated_at", UTCDateTime, nullable=False),
    Index("ix_flag_order_half_mast", "half_mast"),
)


def _is_mapped(cls: type) -> bool:
    try:
        orm.class_mapper(cls)
    except UnmappedClassError:
        return False
    return True


def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model (idempotent)."""

    if _is_mapped(Order):
        return mapper_registry

    log.info("Starting SQLAlchemy mappers")
    mapper_registry.map_imperatively(Order, flag_order_table)
    return mapper_registry
