"""Pydantic schemas for manual bookings."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ManualBookingConflictCheck(BaseModel):
    """A proposed manual block to test against the existing ones."""

    date: dt.date
    start_time: str = Field(..., description="HH:MM or h:MM AM/PM")
    end_time: str = Field(..., description="HH:MM or h:MM AM/PM")
    exclude_id: UUID | None = Field(None, description="Manual booking being edited")

    model_config = ConfigDict(extra="forbid")


class ManualBookingConflictResponse(BaseModel):
    """Whether the proposed block overlaps an active one."""

    has_conflict: bool
