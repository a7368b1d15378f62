"""Create visits and payment_ledger tables

Revision ID: 20261012_000002
Revises: 20261012_000001
Create Date: 2026-10-12

Visits move PENDING -> PAID once; the ledger holds one row per gateway
payment id.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261012_000002"
down_revision: Union[str, None] = "20261012_000001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

payment_status = sa.Enum("PENDING", "PAID", name="payment_status", create_constraint=True)


def upgrade() -> None:
    op.create_table(
        "visits",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("date", sa.String(50), nullable=False),
        sa.Column("time_slot", sa.String(50), nullable=False),
        sa.Column("contact_methods", sa.JSON(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("property_id", sa.String(100), nullable=True),
        sa.Column("payment_status", payment_status, nullable=False, server_default="PENDING"),
        sa.Column("payment_id", sa.String(100), nullable=True),
        sa.Column("order_id", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_visits_payment_status", "visits", ["payment_status"])
    op.create_index("ix_visits_order_id", "visits", ["order_id"])

    op.create_table(
        "payment_ledger",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(10), nullable=False),
        sa.Column("payment_id", sa.String(100), nullable=False),
        sa.Column("order_id", sa.String(100), nullable=False),
        sa.Column("payment_method", sa.String(50), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("visit_id", sa.String(36), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["visit_id"],
            ["visits.id"],
            name="fk_payment_ledger_visit_id",
            ondelete="RESTRICT",
        ),
        sa.UniqueConstraint("payment_id", name="uq_payment_ledger_payment_id"),
    )
    op.create_index("ix_payment_ledger_payment_id", "payment_ledger", ["payment_id"])
    op.create_index("ix_payment_ledger_order_id", "payment_ledger", ["order_id"])
    op.create_index("ix_payment_ledger_visit_id", "payment_ledger", ["visit_id"])


def downgrade() -> None:
    op.drop_index("ix_payment_ledger_visit_id", table_name="payment_ledger")
    op.drop_index("ix_payment_ledger_order_id", table_name="payment_ledger")
    op.drop_index("ix_payment_ledger_payment_id", table_name="payment_ledger")
    op.drop_table("payment_ledger")
    op.drop_index("ix_visits_order_id", table_name="visits")
    op.drop_index("ix_visits_payment_status", table_name="visits")
    op.drop_table("visits")
