"""initial schema

Revision ID: 3f1a9c2b7d40
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "3f1a9c2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "connections",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, nullable=True),
        sa.Column("address", sa.Text, nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="Active"),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_connections_user_id", "connections", ["user_id"])

    op.create_table(
        "meter_readings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("connection_id", sa.Integer, sa.ForeignKey("connections.id"), nullable=True),
        sa.Column("reading_date", sa.Date, nullable=True),
        sa.Column("units_consumed", sa.Float, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_meter_readings_connection_id", "meter_readings", ["connection_id"])

    op.create_table(
        "bills",
        sa.Column("id", sa.String(26), primary_key=True),
        sa.Column("bill_number", sa.String(32), nullable=False),
        sa.Column("bill_date", sa.Date, nullable=False),
        sa.Column("due_date", sa.Date, nullable=False),
        sa.Column("units_consumed", sa.Float, nullable=False, server_default="0"),
        sa.Column("rate_per_unit", sa.Float, nullable=False),
        sa.Column("tax_rate", sa.Float, nullable=False),
        sa.Column("base_amount", sa.Float, nullable=False),
        sa.Column("tax_amount", sa.Float, nullable=False),
        sa.Column("service_charge", sa.Float, nullable=False),
        sa.Column("amount", sa.Float, nullable=False),
        sa.Column("payment_status", sa.String(20), nullable=False, server_default="Unpaid"),
        sa.Column("meter_reading_id", sa.Integer, sa.ForeignKey("meter_readings.id"), nullable=True),
        sa.Column("connection_id", sa.Integer, sa.ForeignKey("connections.id"), nullable=True),
        sa.Column("user_id", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_bills_connection_id", "bills", ["connection_id"])
    op.create_index("ix_bills_user_id", "bills", ["user_id"])
    op.create_index("ix_bills_bill_number", "bills", ["bill_number"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_bills_bill_number", "bills")
    op.drop_index("ix_bills_user_id", "bills")
    op.drop_index("ix_bills_connection_id", "bills")
    op.drop_table("bills")
    op.drop_index("ix_meter_readings_connection_id", "meter_readings")
    op.drop_table("meter_readings")
    op.drop_index("ix_connections_user_id", "connections")
    op.drop_table("connections")
