"""Main API router for v1 endpoints."""

from fastapi import APIRouter

from ridebook.api.v1 import availability, date_exceptions, manual_bookings

router = APIRouter()

# Include all sub-routers
router.include_router(availability.router)
router.include_router(date_exceptions.router)
router.include_router(manual_bookings.router)


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "message": "Ridebook API is running"}
