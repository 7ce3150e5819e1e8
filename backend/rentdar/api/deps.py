"""Shared API dependencies: single import point for all routers.

Re-exports the database session and clock dependencies so that router
modules can import everything they need from one place::

    from rentdar.api.deps import get_clock, get_db
"""

from fastapi import HTTPException, status

from rentdar.database import get_db
from rentdar.services.clock import Clock, get_clock
from rentdar.services.errors import BookingConflictError, NotFoundError


def not_found(exc: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def conflict(exc: BookingConflictError) -> HTTPException:
    """409 for overlaps, 422 for a range that ends before it starts."""
    if exc.is_invalid_range:
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=str(exc))
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Dates conflict: {exc}",
    )


__all__ = [
    "Clock",
    "conflict",
    "get_clock",
    "get_db",
    "not_found",
]
