"""SQLAlchemy models for Ridebook."""

from ridebook.models.base import Base, TimestampMixin, UUIDMixin
from ridebook.models.booking import Booking, BookingStatus
from ridebook.models.date_exception import DateException, DateExceptionType
from ridebook.models.manual_booking import ManualBooking, ManualBookingType
from ridebook.models.schedule import DEFAULT_TIME_RANGES, WeekdaySchedule

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Models
    "WeekdaySchedule",
    "DateException",
    "Booking",
    "ManualBooking",
    # Enums
    "DateExceptionType",
    "BookingStatus",
    "ManualBookingType",
    # Defaults
    "DEFAULT_TIME_RANGES",
]
