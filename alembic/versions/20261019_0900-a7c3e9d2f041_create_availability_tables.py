"""create availability tables

Revision ID: a7c3e9d2f041
Revises:
Create Date: 2026-10-19 09:00:00.000000

Creates the weekly schedule, date exception, booking and manual booking
tables read by the availability engine.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a7c3e9d2f041'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    """Create availability tables."""
    op.create_table(
        'weekday_schedules',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('is_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('time_ranges', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('day_of_week'),
        sa.CheckConstraint('day_of_week >= 0 AND day_of_week <= 6', name='check_schedule_day_of_week'),
    )

    op.create_table(
        'date_exceptions',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('is_enabled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('type', sa.String(20), nullable=False, server_default='closed'),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('time_ranges', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('date'),
    )

    op.create_table(
        'bookings',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('booking_number', sa.String(32), nullable=False),
        sa.Column('customer_email', sa.String(255), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('pickup_date', sa.Date(), nullable=False),
        sa.Column('pickup_time', sa.String(16), nullable=False),
        sa.Column('pickup_address', sa.Text(), nullable=False),
        sa.Column('dropoff_address', sa.Text(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('booking_number'),
    )
    op.create_index('ix_bookings_pickup_date', 'bookings', ['pickup_date'])

    op.create_table(
        'manual_bookings',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.String(16), nullable=False),
        sa.Column('end_time', sa.String(16), nullable=False),
        sa.Column('type', sa.String(20), nullable=False, server_default='manual-booking'),
        sa.Column('client_name', sa.String(255), nullable=True),
        sa.Column('client_phone', sa.String(32), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_manual_bookings_date', 'manual_bookings', ['date'])


def downgrade() -> None:
    """Drop availability tables."""
    op.drop_index('ix_manual_bookings_date', table_name='manual_bookings')
    op.drop_table('manual_bookings')
    op.drop_index('ix_bookings_pickup_date', table_name='bookings')
    op.drop_table('bookings')
    op.drop_table('date_exceptions')
    op.drop_table('weekday_schedules')
