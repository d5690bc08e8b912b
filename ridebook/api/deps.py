"""Dependency injection for API endpoints."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ridebook.database import get_db
from ridebook.services.availability import AvailabilityService

__all__ = [
    "get_db",
    "AsyncSession",
    "get_availability_service",
]


async def get_availability_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AvailabilityService:
    """Availability engine bound to the request's session."""
    return AvailabilityService(db)
