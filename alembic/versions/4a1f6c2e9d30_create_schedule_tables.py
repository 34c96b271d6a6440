"""Create schedule tables

Revision ID: 4a1f6c2e9d30
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4a1f6c2e9d30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "barbershops",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "barbers",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("barbershop_id", sa.String(), sa.ForeignKey("barbershops.id", ondelete="CASCADE"), nullable=False),
        sa.Column("display_name", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index(op.f("ix_barbers_barbershop_id"), "barbers", ["barbershop_id"], unique=False)

    op.create_table(
        "appointments",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("barbershop_id", sa.String(), sa.ForeignKey("barbershops.id", ondelete="CASCADE"), nullable=False),
        sa.Column("barber_id", sa.String(), sa.ForeignKey("barbers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("customer_name", sa.String(), nullable=False),
        sa.Column("service_name", sa.String(), nullable=False),
        sa.Column("start_time", sa.DateTime(), nullable=False),
        sa.Column("end_time", sa.DateTime(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index(op.f("ix_appointments_barbershop_id"), "appointments", ["barbershop_id"], unique=False)
    op.create_index(op.f("ix_appointments_barber_id"), "appointments", ["barber_id"], unique=False)
    op.create_index(op.f("ix_appointments_start_time"), "appointments", ["start_time"], unique=False)

    op.create_table(
        "holidays",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("barbershop_id", sa.String(), sa.ForeignKey("barbershops.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("reason", sa.String(), nullable=False),
        sa.Column("custom_hours", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("barbershop_id", "date", name="uq_holiday_barbershop_date"),
    )
    op.create_index(op.f("ix_holidays_barbershop_id"), "holidays", ["barbershop_id"], unique=False)
    op.create_index(op.f("ix_holidays_date"), "holidays", ["date"], unique=False)

    op.create_table(
        "time_off_requests",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("barber_id", sa.String(), sa.ForeignKey("barbers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("reason", sa.String(), nullable=False, server_default=""),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("reviewed_by", sa.String(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        sa.Column("review_notes", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index(op.f("ix_time_off_requests_barber_id"), "time_off_requests", ["barber_id"], unique=False)
    op.create_index(op.f("ix_time_off_requests_start_date"), "time_off_requests", ["start_date"], unique=False)
    op.create_index(op.f("ix_time_off_requests_end_date"), "time_off_requests", ["end_date"], unique=False)
    op.create_index(op.f("ix_time_off_requests_status"), "time_off_requests", ["status"], unique=False)

    op.create_table(
        "capacity_configs",
        sa.Column("barbershop_id", sa.String(), sa.ForeignKey("barbershops.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("base_capacity", sa.Integer(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("capacity_configs")

    op.drop_index(op.f("ix_time_off_requests_status"), table_name="time_off_requests")
    op.drop_index(op.f("ix_time_off_requests_end_date"), table_name="time_off_requests")
    op.drop_index(op.f("ix_time_off_requests_start_date"), table_name="time_off_requests")
    op.drop_index(op.f("ix_time_off_requests_barber_id"), table_name="time_off_requests")
    op.drop_table("time_off_requests")

    op.drop_index(op.f("ix_holidays_date"), table_name="holidays")
    op.drop_index(op.f("ix_holidays_barbershop_id"), table_name="holidays")
    op.drop_table("holidays")

    op.drop_index(op.f("ix_appointments_start_time"), table_name="appointments")
    op.drop_index(op.f("ix_appointments_barber_id"), table_name="appointments")
    op.drop_index(op.f("ix_appointments_barbershop_id"), table_name="appointments")
    op.drop_table("appointments")

    op.drop_index(op.f("ix_barbers_barbershop_id"), table_name="barbers")
    op.drop_table("barbers")

    op.drop_table("barbershops")
