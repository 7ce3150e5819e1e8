"""Calendar API router: month grid, day detail and two-tap date selection.

The selection state lives with the client. Each ``POST /selection`` carries
the current state plus the tapped day and returns the next state; nothing is
stored server-side.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from rentdar.api.deps import Clock, get_clock, get_db, not_found
from rentdar.calendar.availability import (
    bookings_for_day,
    build_availability,
    is_tappable,
    next_available_checkout,
)
from rentdar.calendar.calendar_math import days_in_month, first_weekday_offset, shift_month
from rentdar.calendar.conflicts import Conflict, DateRange, validate, validate_block
from rentdar.calendar.occupancy import booked_days, occupancy_percent
from rentdar.calendar.selection import SelectionPhase, nights, reset, tap_day
from rentdar.config import settings
from rentdar.models.blocked_range import BlockedRange
from rentdar.models.booking import Booking
from rentdar.schemas.booking import BookingResponse
from rentdar.schemas.calendar import (
    AvailabilityCheckRequest,
    AvailabilityCheckResponse,
    CalendarDayResponse,
    DayBookingsResponse,
    MonthCalendarResponse,
    SelectionRequest,
    SelectionResponse,
    SelectionStateSchema,
)
from rentdar.services import calendar_service
from rentdar.services.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/calendar", tags=["calendar"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _snapshot(
    db: AsyncSession,
    property_id: uuid.UUID | None,
) -> tuple[list[Booking], list[BlockedRange]]:
    """Bookings and blocked ranges for one property, or for all when ``None``."""
    if property_id is not None:
        try:
            await calendar_service.get_property(db, property_id)
        except NotFoundError as exc:
            raise not_found(exc) from exc
    bookings = await calendar_service.fetch_bookings(db, property_id)
    blocked = await calendar_service.fetch_blocked_ranges(db, property_id)
    return bookings, blocked


def _month_anchor(year: int, month: int) -> date:
    return date(year, month, 1)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/{year}/{month}",
    response_model=MonthCalendarResponse,
    summary="Classify every day of a month",
)
async def get_month(
    year: int = Path(..., ge=1900, le=2999),
    month: int = Path(..., ge=1, le=12),
    property_id: uuid.UUID | None = Query(None, description="Limit to one property; all properties when omitted"),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> MonthCalendarResponse:
    """Return the month grid with one classification per day plus occupancy."""
    anchor = _month_anchor(year, month)
    today = clock.today()
    bookings, blocked = await _snapshot(db, property_id)

    days = build_availability(anchor, bookings, blocked, today, max_platform_dots=settings.max_platform_dots)

    return MonthCalendarResponse(
        year=year,
        month=month,
        today=today,
        days_in_month=days_in_month(anchor),
        first_weekday_offset=first_weekday_offset(anchor, settings.first_weekday),
        previous_month=shift_month(anchor, -1),
        next_month=shift_month(anchor, 1),
        days=[CalendarDayResponse.from_day(days[n]) for n in sorted(days)],
        booked_days=booked_days(anchor, bookings),
        occupancy_percent=round(occupancy_percent(anchor, bookings), 2),
    )


@router.get(
    "/{year}/{month}/days/{day}",
    response_model=DayBookingsResponse,
    summary="Stays touching one day",
)
async def get_day(
    year: int = Path(..., ge=1900, le=2999),
    month: int = Path(..., ge=1, le=12),
    day: int = Path(..., ge=1, le=31),
    property_id: uuid.UUID | None = Query(None),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> DayBookingsResponse:
    anchor = _month_anchor(year, month)
    if day > days_in_month(anchor):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Day not in month",
        )
    bookings, blocked = await _snapshot(db, property_id)
    days = build_availability(anchor, bookings, blocked, clock.today(), max_platform_dots=settings.max_platform_dots)
    cell = days[day]

    return DayBookingsResponse(
        date=cell.date,
        classification=cell.classification,
        bookings=[BookingResponse.model_validate(b) for b in bookings_for_day(cell.date, bookings)],
    )


@router.post(
    "/selection",
    response_model=SelectionResponse,
    summary="Apply a day tap to a check-in/check-out selection",
)
async def apply_selection(
    body: SelectionRequest,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> SelectionResponse:
    """Advance the client's selection by one tap.

    Taps on booked, blocked or past days are refused and the state is
    returned unchanged. A completed selection is also run through the
    conflict check, since the days between the two taps may be taken.
    """
    if body.action == "reset":
        cleared = reset()
        return SelectionResponse(state=SelectionStateSchema.model_validate(cleared), accepted=True, nights=0)

    state = body.state.to_state()

    tapped = body.day
    bookings, blocked = await _snapshot(db, body.property_id)
    days = build_availability(tapped, bookings, blocked, clock.today(), max_platform_dots=settings.max_platform_dots)
    classification = days[tapped.day].classification

    if not is_tappable(classification):
        logger.debug("Ignoring tap on %s day %s", classification.value, tapped)
        return SelectionResponse(
            state=SelectionStateSchema.model_validate(state),
            accepted=False,
            rejected_classification=classification,
            nights=nights(state),
        )

    new_state = tap_day(state, tapped)
    response = SelectionResponse(
        state=SelectionStateSchema.model_validate(new_state),
        accepted=True,
        nights=nights(new_state),
    )

    if new_state.phase is SelectionPhase.START_ONLY:
        response.suggested_check_out = next_available_checkout(
            tapped,
            bookings,
            blocked,
            search_limit_days=settings.checkout_search_limit_days,
        )
    elif new_state.is_complete:
        result = validate(DateRange(new_state.start, new_state.end), bookings, blocked)
        if isinstance(result, Conflict):
            response.conflict_reason = result.reason
            response.conflict_message = result.describe()

    return response


@router.post(
    "/validate",
    response_model=AvailabilityCheckResponse,
    summary="Dry-run the conflict check for a stay or a block",
)
async def check_availability(
    body: AvailabilityCheckRequest,
    db: AsyncSession = Depends(get_db),
) -> AvailabilityCheckResponse:
    """``kind=stay`` treats ``end`` as checkout (exclusive); ``kind=block`` as the last closed day."""
    bookings, blocked = await _snapshot(db, body.property_id)
    if body.kind == "block":
        result = validate_block(body.start, body.end, bookings, blocked, exclude_id=body.exclude_id)
    else:
        result = validate(DateRange(body.start, body.end), bookings, blocked, exclude_id=body.exclude_id)

    if isinstance(result, Conflict):
        entity = result.conflicting_entity
        return AvailabilityCheckResponse(
            ok=False,
            reason=result.reason,
            message=result.describe(),
            conflicting_id=entity.id if entity is not None else None,
        )
    return AvailabilityCheckResponse(ok=True)
