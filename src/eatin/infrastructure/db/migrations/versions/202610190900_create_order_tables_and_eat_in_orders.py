"""create order tables and eat-in orders

Revision ID: 202610190900
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "202610190900"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "order_tables",
        sa.Column("id", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("number_of_guests", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("occupied", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("number_of_guests >= 0", name="ck_order_tables_guests_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_order_tables_created_at", "order_tables", ["created_at"], unique=False)

    op.create_table(
        "eat_in_orders",
        sa.Column("id", sa.String(length=50), nullable=False),
        sa.Column("order_table_id", sa.String(length=50), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column(
            "order_date_time",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["order_table_id"], ["order_tables.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_eat_in_orders_table_status",
        "eat_in_orders",
        ["order_table_id", "status"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_eat_in_orders_table_status", table_name="eat_in_orders")
    op.drop_table("eat_in_orders")
    op.drop_index("ix_order_tables_created_at", table_name="order_tables")
    op.drop_table("order_tables")
