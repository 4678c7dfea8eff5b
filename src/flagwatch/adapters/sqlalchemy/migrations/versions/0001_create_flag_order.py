"""create flag_order

Revision ID: 0001_create_flag_order
Revises:
Create Date: 2025-11-30 12:00:00

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from flagwatch.adapters.sqlalchemy.mappings import UTCDateTime

revision: str = "0001_create_flag_order"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "flag_order",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("jurisdiction", sa.String(length=16), nullable=False),
        sa.Column("half_mast", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("awaiting_start", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("reason", sa.String(length=255), nullable=True),
        sa.Column("reason_detail", sa.String(length=255), nullable=True),
        sa.Column("start_date", sa.String(length=32), nullable=True),
        sa.Column("end_date", sa.String(length=32), nullable=True),
        sa.Column("raw_source", sa.Text(), nullable=True),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_flag_order")),
        sa.UniqueConstraint("jurisdiction", name=op.f("uq_flag_order_jurisdiction")),
    )
    op.create_index("ix_flag_order_half_mast", "flag_order", ["half_mast"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_flag_order_half_mast", table_name="flag_order")
    op.drop_table("flag_order")
