"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator, Callable
from datetime import date, datetime
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ridebook.models import (
    Base,
    Booking,
    BookingStatus,
    DateException,
    ManualBooking,
    WeekdaySchedule,
)
from ridebook.services.availability import AvailabilityService, BlockingPolicy
from tests.helpers import NOW

# In-memory SQLite by default; point at Postgres with TEST_DATABASE_URL
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create test database engine."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    session_factory = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def policy() -> BlockingPolicy:
    """Default 30-minute grid, 30/60 buffer, 2-hour same-day cutoff."""
    return BlockingPolicy()


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Frozen clock at NOW."""
    return lambda: NOW


@pytest.fixture
def availability(db: AsyncSession, policy: BlockingPolicy, clock) -> AvailabilityService:
    """Availability engine over the test session with a frozen clock."""
    return AvailabilityService(db, policy=policy, clock=clock)


@pytest_asyncio.fixture
async def open_week(db: AsyncSession) -> list[WeekdaySchedule]:
    """Every weekday enabled 00:00-23:59."""
    schedules = [
        WeekdaySchedule(
            id=uuid4(),
            day_of_week=day,
            is_enabled=True,
            time_ranges=[{"start": "00:00", "end": "23:59"}],
        )
        for day in range(7)
    ]
    db.add_all(schedules)
    await db.flush()
    return schedules


@pytest_asyncio.fixture
async def make_booking(db: AsyncSession):
    """Factory for bookings on a date/time."""

    async def _make(
        pickup_date: date,
        pickup_time: str,
        status: BookingStatus = BookingStatus.CONFIRMED,
    ) -> Booking:
        booking = Booking(
            id=uuid4(),
            booking_number=f"BK-{uuid4().hex[:8].upper()}",
            customer_email="rider@example.com",
            status=status.value,
            pickup_date=pickup_date,
            pickup_time=pickup_time,
            pickup_address="1 Terminal Dr",
            dropoff_address="200 Main St",
        )
        db.add(booking)
        await db.flush()
        return booking

    return _make


@pytest_asyncio.fixture
async def make_manual_booking(db: AsyncSession):
    """Factory for manual blocks on a date."""

    async def _make(
        on_date: date, start_time: str, end_time: str, is_active: bool = True
    ) -> ManualBooking:
        manual_booking = ManualBooking(
            id=uuid4(),
            title="Phone booking",
            date=on_date,
            start_time=start_time,
            end_time=end_time,
            is_active=is_active,
        )
        db.add(manual_booking)
        await db.flush()
        return manual_booking

    return _make


@pytest_asyncio.fixture
async def make_date_exception(db: AsyncSession):
    """Factory for date exceptions."""

    async def _make(
        on_date: date,
        is_enabled: bool = False,
        type: str = "closed",
        time_ranges: list[dict[str, str]] | None = None,
    ) -> DateException:
        exception = DateException(
            id=uuid4(),
            date=on_date,
            is_enabled=is_enabled,
            type=type,
            time_ranges=time_ranges or [],
        )
        db.add(exception)
        await db.flush()
        await db.refresh(exception)
        return exception

    return _make
