"""Pydantic schemas for Ridebook API."""

from ridebook.schemas.availability import (
    AvailabilityCheckResponse,
    AvailableSlotsResponse,
    ScheduleResponse,
    ScheduleUpdate,
    WeekdayScheduleUpdate,
)
from ridebook.schemas.date_exception import (
    DateExceptionCreate,
    DateExceptionLookupResponse,
    DateExceptionResponse,
    DateExceptionUpdate,
)
from ridebook.schemas.manual_booking import (
    ManualBookingConflictCheck,
    ManualBookingConflictResponse,
)
from ridebook.schemas.time_range import TimeRange

__all__ = [
    # Schedule / availability
    "TimeRange",
    "ScheduleUpdate",
    "WeekdayScheduleUpdate",
    "ScheduleResponse",
    "AvailableSlotsResponse",
    "AvailabilityCheckResponse",
    # DateException
    "DateExceptionCreate",
    "DateExceptionUpdate",
    "DateExceptionResponse",
    "DateExceptionLookupResponse",
    # ManualBooking
    "ManualBookingConflictCheck",
    "ManualBookingConflictResponse",
]
