"""Shared test constants and helpers."""

from datetime import date, datetime
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from ridebook.models import WeekdaySchedule

# Monday 19 October 2026, 10:00 local
NOW = datetime(2026, 10, 19, 10, 0)
TODAY = NOW.date()
TOMORROW = date(2026, 10, 20)  # Tuesday
NEXT_WEDNESDAY = date(2026, 10, 21)


def all_ticks() -> list[str]:
    """The 48 half-hour ticks of a day."""
    return [f"{m // 60:02d}:{m % 60:02d}" for m in range(0, 1440, 30)]


async def add_schedule(
    db: AsyncSession, day_of_week: int, time_ranges: list, is_enabled: bool = True
) -> WeekdaySchedule:
    """Insert a weekday schedule row directly, bypassing validation."""
    schedule = WeekdaySchedule(
        id=uuid4(), day_of_week=day_of_week, is_enabled=is_enabled, time_ranges=time_ranges
    )
    db.add(schedule)
    await db.flush()
    await db.refresh(schedule)
    return schedule
