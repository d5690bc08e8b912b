"""Date exception API endpoints - holidays, closures and special hours."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ridebook.api.deps import get_db
from ridebook.models import DateException
from ridebook.schemas.date_exception import (
    DateExceptionCreate,
    DateExceptionLookupResponse,
    DateExceptionResponse,
    DateExceptionUpdate,
)
from ridebook.services import date_exception as date_exception_service
from ridebook.utils.clock import local_now

router = APIRouter(prefix="/date-exceptions", tags=["date-exceptions"])


async def get_date_exception_dependency(
    exception_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DateException:
    """Get date exception by ID or raise 404."""
    try:
        return await date_exception_service.get_date_exception(db, exception_id)
    except date_exception_service.DateExceptionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post(
    "",
    response_model=DateExceptionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a date exception",
)
async def create_date_exception(
    exception_data: DateExceptionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DateException:
    """Close a date or give it custom/blocked hours."""
    try:
        exception = await date_exception_service.create_date_exception(db, exception_data)
    except date_exception_service.DateExceptionConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except date_exception_service.DateExceptionValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    await db.commit()
    return exception


@router.get(
    "",
    response_model=list[DateExceptionResponse],
    summary="List date exceptions",
)
async def list_date_exceptions(
    db: Annotated[AsyncSession, Depends(get_db)],
    start_date: Annotated[date | None, Query(description="Earliest date")] = None,
    end_date: Annotated[date | None, Query(description="Latest date")] = None,
    is_enabled: Annotated[bool | None, Query()] = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=100)] = 100,
) -> list[DateException]:
    """List date exceptions ordered by date."""
    if start_date and end_date and end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must not be before start_date",
        )
    return await date_exception_service.list_date_exceptions(
        db,
        start_date=start_date,
        end_date=end_date,
        is_enabled=is_enabled,
        skip=skip,
        limit=limit,
    )


@router.get(
    "/upcoming",
    response_model=list[DateExceptionResponse],
    summary="List upcoming date exceptions",
)
async def list_upcoming_date_exceptions(
    db: Annotated[AsyncSession, Depends(get_db)],
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> list[DateException]:
    """List exceptions from today onwards."""
    return await date_exception_service.list_upcoming_date_exceptions(
        db, today=local_now().date(), limit=limit
    )


@router.get(
    "/by-date",
    response_model=DateExceptionLookupResponse,
    summary="Look up the exception on a date",
)
async def get_date_exception_by_date(
    db: Annotated[AsyncSession, Depends(get_db)],
    on_date: Annotated[date, Query(alias="date", description="Date (YYYY-MM-DD)")],
) -> DateExceptionLookupResponse:
    """Report whether a date has an exception, and which."""
    exception = await date_exception_service.get_date_exception_by_date(db, on_date)
    return DateExceptionLookupResponse(
        exists=exception is not None,
        exception=DateExceptionResponse.model_validate(exception) if exception else None,
    )


@router.get(
    "/{exception_id}",
    response_model=DateExceptionResponse,
    summary="Get a date exception",
)
async def get_date_exception(
    exception: Annotated[DateException, Depends(get_date_exception_dependency)],
) -> DateException:
    """Get a date exception by ID."""
    return exception


@router.patch(
    "/{exception_id}",
    response_model=DateExceptionResponse,
    summary="Update a date exception",
)
async def update_date_exception(
    exception_data: DateExceptionUpdate,
    exception: Annotated[DateException, Depends(get_date_exception_dependency)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DateException:
    """Update a date exception."""
    try:
        exception = await date_exception_service.update_date_exception(
            db, exception, exception_data
        )
    except date_exception_service.DateExceptionConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except date_exception_service.DateExceptionValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    await db.commit()
    return exception


@router.delete(
    "/{exception_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a date exception",
)
async def delete_date_exception(
    exception: Annotated[DateException, Depends(get_date_exception_dependency)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """Delete a date exception."""
    await date_exception_service.delete_date_exception(db, exception)
    await db.commit()
