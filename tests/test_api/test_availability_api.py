"""API tests for availability and date exception endpoints."""

from collections.abc import AsyncGenerator
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from ridebook.api.deps import get_availability_service, get_db
from ridebook.main import app
from tests.helpers import TODAY, TOMORROW, add_schedule

pytestmark = pytest.mark.asyncio


class UnreachableStore:
    """Availability engine whose store is down."""

    async def get_available_slots(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionError("connection refused"))

    async def is_time_available(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionError("connection refused"))


@pytest_asyncio.fixture
async def client(db, availability) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the test session and frozen clock."""

    async def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_availability_service] = lambda: availability
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestTimeSlots:
    """GET /api/v1/availability/time-slots."""

    async def test_open_day(self, client, db, make_booking):
        """Slots reflect the schedule and existing bookings."""
        await add_schedule(db, 2, [{"start": "09:00", "end": "12:00"}])
        await make_booking(TOMORROW, "10:00")

        response = await client.get(
            "/api/v1/availability/time-slots", params={"date": TOMORROW.isoformat()}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["date"] == TOMORROW.isoformat()
        assert body["slots"] == ["09:00", "11:30", "12:00"]
        assert body["closed"] is False
        assert body["exception"] is None

    async def test_closed_day_carries_exception(self, client, open_week, make_date_exception):
        """A closure comes back closed with the exception attached."""
        await make_date_exception(TOMORROW, is_enabled=False)

        response = await client.get(
            "/api/v1/availability/time-slots", params={"date": TOMORROW.isoformat()}
        )

        body = response.json()
        assert body["slots"] == []
        assert body["closed"] is True
        assert body["exception"]["type"] == "closed"

    async def test_exclude_booking(self, client, open_week, make_booking):
        """The edited booking doesn't block its own ticks."""
        booking = await make_booking(TOMORROW, "14:00")

        response = await client.get(
            "/api/v1/availability/time-slots",
            params={"date": TOMORROW.isoformat(), "exclude_booking_id": str(booking.id)},
        )

        assert "14:00" in response.json()["slots"]

    async def test_bad_date(self, client):
        """Unparseable dates are a validation error."""
        response = await client.get(
            "/api/v1/availability/time-slots", params={"date": "2026-13-40"}
        )

        assert response.status_code == 422

    async def test_store_failure(self, client):
        """A store failure is a 503, not an empty day."""
        app.dependency_overrides[get_availability_service] = lambda: UnreachableStore()

        response = await client.get(
            "/api/v1/availability/time-slots", params={"date": TOMORROW.isoformat()}
        )

        assert response.status_code == 503


class TestCheck:
    """GET /api/v1/availability/check."""

    async def test_available(self, client, open_week):
        """A free 12-hour time is echoed back normalized."""
        response = await client.get(
            "/api/v1/availability/check",
            params={"date": TOMORROW.isoformat(), "time": "2:00 PM"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "date": TOMORROW.isoformat(),
            "time": "14:00",
            "is_available": True,
        }

    async def test_too_soon(self, client, open_week):
        """Same-day times inside the cutoff are unavailable."""
        response = await client.get(
            "/api/v1/availability/check",
            params={"date": TODAY.isoformat(), "time": "11:00"},
        )

        assert response.json()["is_available"] is False

    async def test_bad_time(self, client):
        """Unparseable times are a 400."""
        response = await client.get(
            "/api/v1/availability/check",
            params={"date": TOMORROW.isoformat(), "time": "25:99"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid time format. Use HH:MM"

    async def test_store_failure(self, client):
        """A store failure is a 503."""
        app.dependency_overrides[get_availability_service] = lambda: UnreachableStore()

        response = await client.get(
            "/api/v1/availability/check",
            params={"date": TOMORROW.isoformat(), "time": "14:00"},
        )

        assert response.status_code == 503


class TestSchedule:
    """Weekly schedule endpoints."""

    async def test_update_and_list(self, client):
        """PUT upserts one weekday; GET lists them."""
        response = await client.put(
            "/api/v1/availability/schedule",
            json={
                "day_of_week": 3,
                "is_enabled": True,
                "time_ranges": [{"start": "08:00", "end": "11:00"}],
            },
        )
        assert response.status_code == 200
        assert response.json()["time_ranges"] == [{"start": "08:00", "end": "11:00"}]

        response = await client.get("/api/v1/availability/schedule")
        assert [s["day_of_week"] for s in response.json()] == [3]

    async def test_update_rejects_inverted_range(self, client):
        """An inverted range is a 400."""
        response = await client.put(
            "/api/v1/availability/schedule",
            json={"day_of_week": 3, "time_ranges": [{"start": "11:00", "end": "08:00"}]},
        )

        assert response.status_code == 400

    async def test_update_rejects_unknown_weekday(self, client):
        """Weekdays outside 0-6 fail validation."""
        response = await client.put(
            "/api/v1/availability/schedule", json={"day_of_week": 9, "is_enabled": True}
        )

        assert response.status_code == 422

    async def test_reset(self, client):
        """Reset opens every day around the clock."""
        response = await client.post("/api/v1/availability/schedule/reset")

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 7
        assert all(s["time_ranges"] == [{"start": "00:00", "end": "23:59"}] for s in body)


class TestDateExceptions:
    """Date exception endpoints."""

    async def test_create_and_conflict(self, client):
        """Creating twice for one date conflicts."""
        payload = {"date": TOMORROW.isoformat(), "reason": "Holiday"}

        response = await client.post("/api/v1/date-exceptions", json=payload)
        assert response.status_code == 201
        assert response.json()["type"] == "closed"

        response = await client.post("/api/v1/date-exceptions", json=payload)
        assert response.status_code == 409

    async def test_custom_hours_without_ranges(self, client):
        """Custom hours need ranges."""
        response = await client.post(
            "/api/v1/date-exceptions",
            json={"date": TOMORROW.isoformat(), "is_enabled": True, "type": "custom-hours"},
        )

        assert response.status_code == 422

    async def test_update_and_delete(self, client, make_date_exception):
        """PATCH switches to custom hours; DELETE removes the row."""
        exception = await make_date_exception(TOMORROW)

        response = await client.patch(
            f"/api/v1/date-exceptions/{exception.id}",
            json={"is_enabled": True, "time_ranges": [{"start": "17:00", "end": "19:00"}]},
        )
        assert response.status_code == 200
        assert response.json()["type"] == "custom-hours"

        response = await client.delete(f"/api/v1/date-exceptions/{exception.id}")
        assert response.status_code == 204

        response = await client.get(f"/api/v1/date-exceptions/{exception.id}")
        assert response.status_code == 404

    async def test_get_missing(self, client):
        """Unknown IDs are a 404."""
        response = await client.get(f"/api/v1/date-exceptions/{uuid4()}")

        assert response.status_code == 404

    async def test_list_rejects_inverted_range(self, client):
        """end_date before start_date is a 400."""
        response = await client.get(
            "/api/v1/date-exceptions",
            params={"start_date": TOMORROW.isoformat(), "end_date": TODAY.isoformat()},
        )

        assert response.status_code == 400


class TestMalformedStoredRanges:
    """Stored ranges that don't parse are skipped, not turned into errors."""

    async def test_time_slots_with_bad_exception_range(self, client, open_week, make_date_exception):
        """A bad custom-hours range leaves the good one bookable."""
        await make_date_exception(
            TOMORROW,
            is_enabled=True,
            type="custom-hours",
            time_ranges=[{"start": "10:00", "end": "11:00"}, {"start": "noon"}],
        )

        response = await client.get(
            "/api/v1/availability/time-slots", params={"date": TOMORROW.isoformat()}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["slots"] == ["10:00", "10:30", "11:00"]
        assert body["closed"] is False
        assert body["exception"]["time_ranges"] == [{"start": "10:00", "end": "11:00"}]

    async def test_schedule_with_bad_range(self, client, db):
        """GET /schedule leaves out ranges it can't read."""
        await add_schedule(
            db, 2, [{"start": "09:00", "end": "12:00"}, {"start": 900, "end": None}]
        )

        response = await client.get("/api/v1/availability/schedule")

        assert response.status_code == 200
        assert response.json()[0]["time_ranges"] == [{"start": "09:00", "end": "12:00"}]

        response = await client.get(
            "/api/v1/availability/time-slots", params={"date": TOMORROW.isoformat()}
        )
        assert response.status_code == 200
        assert response.json()["slots"][0] == "09:00"
        assert response.json()["slots"][-1] == "12:00"

    async def test_inverted_and_legacy_ranges(self, client, db):
        """Inverted ranges are dropped and 12-hour ones come back as HH:MM."""
        await add_schedule(
            db,
            2,
            [{"start": "5:00 PM", "end": "7:00 PM"}, {"start": "15:00", "end": "14:00"}],
        )

        response = await client.get("/api/v1/availability/schedule")

        assert response.json()[0]["time_ranges"] == [{"start": "17:00", "end": "19:00"}]


class TestDateExceptionByDate:
    """GET /api/v1/date-exceptions/by-date."""

    async def test_exists(self, client, make_date_exception):
        """A date with an exception reports it."""
        exception = await make_date_exception(TOMORROW)

        response = await client.get(
            "/api/v1/date-exceptions/by-date", params={"date": TOMORROW.isoformat()}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["exists"] is True
        assert body["exception"]["id"] == str(exception.id)

    async def test_missing(self, client):
        """A date without one says so."""
        response = await client.get(
            "/api/v1/date-exceptions/by-date", params={"date": TOMORROW.isoformat()}
        )

        assert response.status_code == 200
        assert response.json() == {"exists": False, "exception": None}

    async def test_date_required(self, client):
        """The date parameter is required."""
        response = await client.get("/api/v1/date-exceptions/by-date")

        assert response.status_code == 422


class TestManualBookingConflict:
    """POST /api/v1/manual-bookings/check-conflict."""

    async def test_conflict(self, client, make_manual_booking):
        """Overlapping an active block is a conflict."""
        await make_manual_booking(TOMORROW, "18:00", "19:00")

        response = await client.post(
            "/api/v1/manual-bookings/check-conflict",
            json={"date": TOMORROW.isoformat(), "start_time": "6:30 PM", "end_time": "20:00"},
        )

        assert response.status_code == 200
        assert response.json() == {"has_conflict": True}

    async def test_exclude_self(self, client, make_manual_booking):
        """The block being edited doesn't conflict with itself."""
        block = await make_manual_booking(TOMORROW, "18:00", "19:00")

        response = await client.post(
            "/api/v1/manual-bookings/check-conflict",
            json={
                "date": TOMORROW.isoformat(),
                "start_time": "18:00",
                "end_time": "19:00",
                "exclude_id": str(block.id),
            },
        )

        assert response.json() == {"has_conflict": False}

    @pytest.mark.parametrize(
        ("start_time", "end_time"), [("six", "19:00"), ("19:00", "18:00")]
    )
    async def test_bad_times(self, client, start_time, end_time):
        """Unparseable or inverted times are a 400."""
        response = await client.post(
            "/api/v1/manual-bookings/check-conflict",
            json={"date": TOMORROW.isoformat(), "start_time": start_time, "end_time": end_time},
        )

        assert response.status_code == 400
