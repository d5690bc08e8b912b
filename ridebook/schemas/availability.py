"""Pydantic schemas for schedules and availability."""

import datetime as dt
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ridebook.schemas.date_exception import DateExceptionResponse
from ridebook.schemas.time_range import TimeRange, usable_time_ranges


class ScheduleUpdate(BaseModel):
    """Schema for updating a weekday schedule (all fields optional)."""

    time_ranges: list[TimeRange] | None = Field(None, description="Allowed booking hours")
    is_enabled: bool | None = Field(None, description="Whether bookings are taken that day")

    model_config = ConfigDict(extra="forbid")


class WeekdayScheduleUpdate(ScheduleUpdate):
    """Schedule update addressed to one weekday, as sent to the admin endpoint."""

    day_of_week: int = Field(..., ge=0, le=6, description="0=Sunday, 6=Saturday")


class ScheduleResponse(BaseModel):
    """Schema for weekday schedule responses."""

    id: UUID
    day_of_week: int
    is_enabled: bool
    time_ranges: list[TimeRange]
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("time_ranges", mode="before")
    @classmethod
    def drop_unusable_time_ranges(cls, value: Any) -> list[dict[str, str]]:
        """Stored ranges that no longer parse are left out of the response."""
        return usable_time_ranges(value)


class AvailableSlotsResponse(BaseModel):
    """Bookable pickup times for one date.

    ``closed`` distinguishes a closed or excepted day from a day whose
    hours are simply all taken.
    """

    date: dt.date
    slots: list[str] = Field(default_factory=list, description="HH:MM, ascending")
    closed: bool = False
    exception: DateExceptionResponse | None = None


class AvailabilityCheckResponse(BaseModel):
    """Result of checking one pickup time."""

    date: dt.date
    time: str
    is_available: bool
