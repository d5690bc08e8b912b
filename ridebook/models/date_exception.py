"""Date exception model - closures and special hours for specific dates."""

import datetime
from enum import Enum
from typing import Any

from sqlalchemy import JSON, Boolean, Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ridebook.models.base import Base, TimestampMixin, UUIDMixin


class DateExceptionType(str, Enum):
    """Date exception type enum."""

    CLOSED = "closed"
    CUSTOM_HOURS = "custom-hours"
    BLOCKED_HOURS = "blocked-hours"


class DateException(Base, UUIDMixin, TimestampMixin):
    """Override of the weekday schedule for one calendar date."""

    __tablename__ = "date_exceptions"

    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, unique=True)
    is_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )  # false = whole date closed
    type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DateExceptionType.CLOSED.value
    )
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    time_ranges: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<DateException(date={self.date}, type='{self.type}', is_enabled={self.is_enabled})>"
