"""Booking model - a customer ride reservation."""

from datetime import date
from enum import Enum

from sqlalchemy import Date, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ridebook.models.base import Base, TimestampMixin, UUIDMixin


class BookingStatus(str, Enum):
    """Booking status enum."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Booking(Base, UUIDMixin, TimestampMixin):
    """A ride reservation with a pickup date and time."""

    __tablename__ = "bookings"
    __table_args__ = (Index("ix_bookings_pickup_date", "pickup_date"),)

    booking_number: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=BookingStatus.PENDING.value,
    )

    pickup_date: Mapped[date] = mapped_column(Date, nullable=False)
    # Stored as entered; legacy rows may hold "5:30 PM" style values
    pickup_time: Mapped[str] = mapped_column(String(16), nullable=False)
    pickup_address: Mapped[str] = mapped_column(Text, nullable=False)
    dropoff_address: Mapped[str] = mapped_column(Text, nullable=False)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Booking(id={self.id}, status='{self.status}', pickup={self.pickup_date} {self.pickup_time})>"
