"""Manual booking model - admin-created blocks of time."""

import datetime
from enum import Enum

from sqlalchemy import Boolean, Date, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ridebook.models.base import Base, TimestampMixin, UUIDMixin


class ManualBookingType(str, Enum):
    """Manual booking type enum."""

    MANUAL_BOOKING = "manual-booking"
    MAINTENANCE = "maintenance"
    PERSONAL = "personal"
    BLOCKED = "blocked"


class ManualBooking(Base, UUIDMixin, TimestampMixin):
    """An explicit blocked range on a date (phone booking, maintenance...)."""

    __tablename__ = "manual_bookings"
    __table_args__ = (Index("ix_manual_bookings_date", "date"),)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    start_time: Mapped[str] = mapped_column(String(16), nullable=False)
    end_time: Mapped[str] = mapped_column(String(16), nullable=False)

    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ManualBookingType.MANUAL_BOOKING.value,
    )
    client_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    client_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        """String representation."""
        return f"<ManualBooking(id={self.id}, date={self.date}, {self.start_time}-{self.end_time}, is_active={self.is_active})>"
