"""Bookings CRUD API router.

Every write goes through :mod:`rentdar.services.calendar_service`, which
refuses dates that overlap another stay or a blocked range on the same
property.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from rentdar.api.deps import Clock, conflict, get_clock, get_db, not_found
from rentdar.calendar.bucketing import (
    BookingPhase,
    booking_nights,
    booking_status,
    classify,
    filter_bookings,
    group_bookings,
    summarize,
)
from rentdar.models.booking import Booking
from rentdar.schemas.booking import (
    BookingCreate,
    BookingGroupResponse,
    BookingGroupsResponse,
    BookingListItem,
    BookingListResponse,
    BookingResponse,
    BookingSummaryResponse,
    BookingUpdate,
)
from rentdar.schemas.common import MessageResponse
from rentdar.services import calendar_service
from rentdar.services.errors import BookingConflictError, NotFoundError

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _list_item(booking: Booking, clock: Clock) -> BookingListItem:
    now = clock.now()
    base = BookingResponse.model_validate(booking).model_dump()
    return BookingListItem(
        **base,
        nights=booking_nights(booking),
        phase=classify(booking, now, clock.tz),
        status=booking_status(booking, now, clock.tz),
    )


async def _get_booking_or_404(booking_id: uuid.UUID, db: AsyncSession) -> Booking:
    try:
        return await calendar_service.get_booking(db, booking_id)
    except NotFoundError as exc:
        raise not_found(exc) from exc


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
)
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    """Create a booking.

    Validates that:
    - The property exists.
    - The stay does not overlap another booking (checkout day excluded).
    - The stay does not touch a blocked range (both ends included).
    """
    try:
        return await calendar_service.create_booking(db, body.model_dump())
    except NotFoundError as exc:
        raise not_found(exc) from exc
    except BookingConflictError as exc:
        raise conflict(exc) from exc


@router.get(
    "",
    response_model=BookingListResponse,
    summary="List bookings",
)
async def list_bookings(
    property_id: uuid.UUID | None = Query(None, description="Filter by property"),
    phase: BookingPhase | None = Query(None, description="upcoming, current or past"),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> BookingListResponse:
    """Return bookings, optionally limited to one property and one phase.

    Without a phase the bookings are ordered by check-in; with a phase they
    use the list-screen order (past bookings most recent first).
    """
    bookings = await calendar_service.fetch_bookings(db, property_id)
    if phase is not None:
        bookings = filter_bookings(bookings, phase, clock.now(), clock.tz)

    items = [_list_item(b, clock) for b in bookings]
    return BookingListResponse(items=items, total=len(items))


@router.get(
    "/groups",
    response_model=BookingGroupsResponse,
    summary="Bookings grouped for the list screen",
)
async def list_booking_groups(
    phase: BookingPhase = Query(BookingPhase.UPCOMING),
    property_id: uuid.UUID | None = Query(None, description="Filter by property"),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> BookingGroupsResponse:
    """Upcoming bookings by horizon (this week, next week, ...), others as one group."""
    now = clock.now()
    bookings = await calendar_service.fetch_bookings(db, property_id)
    groups = group_bookings(bookings, phase, now, clock.tz)
    summary = summarize(filter_bookings(bookings, phase, now, clock.tz))

    return BookingGroupsResponse(
        phase=phase,
        groups=[
            BookingGroupResponse(
                key=group.key,
                title=group.title,
                bookings=[_list_item(b, clock) for b in group.bookings],
            )
            for group in groups
        ],
        summary=BookingSummaryResponse(
            total_bookings=summary.total_bookings,
            total_nights=summary.total_nights,
            total_amount_minor=summary.total_amount_minor,
        ),
    )


@router.get(
    "/{booking_id}",
    response_model=BookingListItem,
    summary="Get booking detail",
)
async def get_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> BookingListItem:
    booking = await _get_booking_or_404(booking_id, db)
    return _list_item(booking, clock)


@router.put(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Update a booking",
)
async def update_booking(
    booking_id: uuid.UUID,
    body: BookingUpdate,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    """Partially update a booking.

    Re-runs conflict detection when the dates or the property change, ignoring
    the booking being edited.
    """
    booking = await _get_booking_or_404(booking_id, db)
    try:
        return await calendar_service.update_booking(db, booking, body.model_dump(exclude_unset=True))
    except NotFoundError as exc:
        raise not_found(exc) from exc
    except BookingConflictError as exc:
        raise conflict(exc) from exc


@router.delete(
    "/{booking_id}",
    response_model=MessageResponse,
    summary="Delete a booking",
)
async def delete_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    booking = await _get_booking_or_404(booking_id, db)
    await calendar_service.delete_entity(db, booking)
    return {"message": "Booking deleted"}
