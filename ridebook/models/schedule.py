"""Weekday schedule model - the recurring weekly opening hours."""

from typing import Any

from sqlalchemy import JSON, Boolean, CheckConstraint, Integer
from sqlalchemy.orm import Mapped, mapped_column

from ridebook.models.base import Base, TimestampMixin, UUIDMixin

DEFAULT_TIME_RANGES: list[dict[str, str]] = [{"start": "09:00", "end": "17:00"}]


def _default_time_ranges() -> list[dict[str, str]]:
    return [dict(time_range) for time_range in DEFAULT_TIME_RANGES]


class WeekdaySchedule(Base, UUIDMixin, TimestampMixin):
    """Allowed booking hours for one day of the week."""

    __tablename__ = "weekday_schedules"
    __table_args__ = (
        CheckConstraint(
            "day_of_week >= 0 AND day_of_week <= 6", name="check_schedule_day_of_week"
        ),
    )

    day_of_week: Mapped[int] = mapped_column(
        Integer, nullable=False, unique=True
    )  # 0=Sunday, 6=Saturday
    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # [{"start": "HH:MM", "end": "HH:MM"}, ...]
    time_ranges: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=_default_time_ranges
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<WeekdaySchedule(day_of_week={self.day_of_week}, is_enabled={self.is_enabled}, ranges={self.time_ranges})>"
