"""Analytics API router: monthly occupancy per property."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rentdar.api.deps import Clock, get_clock, get_db
from rentdar.calendar.calendar_math import days_in_month
from rentdar.calendar.occupancy import booked_days, rate
from rentdar.models.booking import Booking
from rentdar.models.property import Property
from rentdar.schemas.analytics import OccupancyResponse, OccupancySummaryResponse
from rentdar.services import calendar_service

router = APIRouter(prefix="/api/v1/analytics", tags=["analytics"])


@router.get("/occupancy", response_model=OccupancySummaryResponse)
async def get_occupancy(
    year: int | None = Query(None, ge=1, le=9999, description="Defaults to the current year"),
    month: int | None = Query(None, ge=1, le=12, description="Defaults to the current month"),
    property_id: uuid.UUID | None = Query(None, description="Filter by specific property"),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> OccupancySummaryResponse:
    """Calculate monthly occupancy rates.

    For each property the endpoint counts the distinct days of the month
    covered by a stay. An overall weighted average is returned alongside
    per-property breakdowns.
    """
    today = clock.today()
    anchor = today.replace(year=year or today.year, month=month or today.month, day=1)
    total_days = days_in_month(anchor)

    properties_query = select(Property).order_by(Property.name)
    if property_id is not None:
        properties_query = properties_query.where(Property.id == property_id)
    properties_result = await db.execute(properties_query)
    properties = list(properties_result.scalars().all())

    if not properties and property_id is not None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Property not found",
        )

    # Group bookings by property
    all_bookings = await calendar_service.fetch_bookings(db, property_id)
    bookings_by_property: dict[uuid.UUID, list[Booking]] = {p.id: [] for p in properties}
    for booking in all_bookings:
        bookings_by_property.setdefault(booking.property_id, []).append(booking)

    occupancy_items: list[OccupancyResponse] = []
    total_booked_sum = 0
    total_days_sum = 0

    for prop in properties:
        booked = booked_days(anchor, bookings_by_property.get(prop.id, []))
        occupancy_items.append(
            OccupancyResponse(
                property_id=prop.id,
                property_name=prop.name,
                year=anchor.year,
                month=anchor.month,
                total_days=total_days,
                booked_days=booked,
                occupancy_rate=rate(booked, total_days),
            )
        )
        total_booked_sum += booked
        total_days_sum += total_days

    return OccupancySummaryResponse(
        year=anchor.year,
        month=anchor.month,
        properties=occupancy_items,
        overall_occupancy_rate=rate(total_booked_sum, total_days_sum),
    )
