"""Pydantic schemas for DateException."""

import datetime as dt
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ridebook.schemas.time_range import TimeRange, usable_time_ranges

DateExceptionKind = Literal["closed", "custom-hours", "blocked-hours"]


class DateExceptionCreate(BaseModel):
    """Schema for creating a date exception."""

    date: dt.date
    is_enabled: bool = Field(default=False, description="false = closed all day")
    type: DateExceptionKind = "closed"
    reason: str | None = Field(None, description="Holiday, special event...")
    time_ranges: list[TimeRange] = Field(default_factory=list)

    @model_validator(mode="after")
    def require_ranges_for_hours(self) -> "DateExceptionCreate":
        """Custom and blocked hours need at least one range."""
        if self.type in ("custom-hours", "blocked-hours") and not self.time_ranges:
            raise ValueError(f"type '{self.type}' requires at least one time range")
        return self


class DateExceptionUpdate(BaseModel):
    """Schema for updating a date exception (all fields optional)."""

    date: dt.date | None = None
    is_enabled: bool | None = None
    type: DateExceptionKind | None = None
    reason: str | None = None
    time_ranges: list[TimeRange] | None = None

    model_config = ConfigDict(extra="forbid")


class DateExceptionResponse(BaseModel):
    """Schema for date exception responses."""

    id: UUID
    date: dt.date
    is_enabled: bool
    type: str
    reason: str | None
    time_ranges: list[TimeRange]
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("time_ranges", mode="before")
    @classmethod
    def drop_unusable_time_ranges(cls, value: Any) -> list[dict[str, str]]:
        """Stored ranges that no longer parse are left out of the response."""
        return usable_time_ranges(value)


class DateExceptionLookupResponse(BaseModel):
    """The exception on one date, if there is one."""

    exists: bool
    exception: DateExceptionResponse | None = None
