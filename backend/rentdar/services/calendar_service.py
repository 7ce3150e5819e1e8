"""Calendar persistence: snapshot reads and conflict-guarded writes.

Reads return plain lists ordered by date so the pure engine in
:mod:`rentdar.calendar` can work on an in-memory snapshot. Every write of a
booking or blocked range is validated against the property's current
snapshot first.
"""

import logging
import uuid
from datetime import date
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentdar.calendar.conflicts import Conflict, DateRange, ValidationResult, validate, validate_block
from rentdar.models.blocked_range import BlockedRange
from rentdar.models.booking import Booking
from rentdar.models.property import Property
from rentdar.services.errors import BookingConflictError, NotFoundError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


async def get_property(db: AsyncSession, property_id: uuid.UUID) -> Property:
    """Fetch a property or raise :class:`NotFoundError`."""
    prop = await db.get(Property, property_id)
    if prop is None:
        raise NotFoundError("Property")
    return prop


async def list_properties(db: AsyncSession, skip: int = 0, limit: int = 20) -> tuple[list[Property], int]:
    """A page of properties, newest first, and the overall count."""
    total = (await db.execute(select(func.count()).select_from(Property))).scalar_one()
    result = await db.execute(
        select(Property).order_by(Property.created_at.desc(), Property.name).offset(skip).limit(limit)
    )
    return list(result.scalars().all()), total


async def fetch_bookings(db: AsyncSession, property_id: uuid.UUID | None = None) -> list[Booking]:
    """All bookings, or those of one property, ascending by check-in."""
    query = select(Booking)
    if property_id is not None:
        query = query.where(Booking.property_id == property_id)
    result = await db.execute(query.order_by(Booking.check_in, Booking.created_at))
    return list(result.scalars().all())


async def fetch_blocked_ranges(db: AsyncSession, property_id: uuid.UUID | None = None) -> list[BlockedRange]:
    """All blocked ranges, or those of one property, ascending by start date."""
    query = select(BlockedRange)
    if property_id is not None:
        query = query.where(BlockedRange.property_id == property_id)
    result = await db.execute(query.order_by(BlockedRange.start_date, BlockedRange.created_at))
    return list(result.scalars().all())


async def get_booking(db: AsyncSession, booking_id: uuid.UUID) -> Booking:
    booking = await db.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError("Booking")
    return booking


async def get_blocked_range(db: AsyncSession, blocked_id: uuid.UUID) -> BlockedRange:
    blocked = await db.get(BlockedRange, blocked_id)
    if blocked is None:
        raise NotFoundError("Blocked range")
    return blocked


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


async def check_stay(
    db: AsyncSession,
    property_id: uuid.UUID,
    check_in: date,
    check_out: date,
    exclude_id: uuid.UUID | None = None,
) -> ValidationResult:
    """Dry-run the conflict check for a stay on ``property_id``."""
    bookings = await fetch_bookings(db, property_id)
    blocked = await fetch_blocked_ranges(db, property_id)
    return validate(DateRange(check_in, check_out), bookings, blocked, exclude_id=exclude_id)


async def check_block(
    db: AsyncSession,
    property_id: uuid.UUID,
    start_date: date,
    end_date: date,
    exclude_id: uuid.UUID | None = None,
) -> ValidationResult:
    """Dry-run the conflict check for an inclusive block on ``property_id``."""
    bookings = await fetch_bookings(db, property_id)
    blocked = await fetch_blocked_ranges(db, property_id)
    return validate_block(start_date, end_date, bookings, blocked, exclude_id=exclude_id)


def _raise_on_conflict(result: ValidationResult, property_id: uuid.UUID) -> None:
    if isinstance(result, Conflict):
        logger.info(
            "Rejected dates on property %s: %s (%s)",
            property_id,
            result.reason.value,
            result.describe(),
        )
        raise BookingConflictError(result)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


async def create_property(db: AsyncSession, data: dict[str, Any]) -> Property:
    prop = Property(**data)
    db.add(prop)
    await db.flush()
    await db.refresh(prop)
    logger.info("Created property %s (%s)", prop.id, prop.name)
    return prop


async def delete_property(db: AsyncSession, prop: Property) -> None:
    """Delete a property; its stays and blocked ranges go with it."""
    # Reload the collections so the ORM cascade sees rows added in this session
    await db.refresh(prop, attribute_names=["bookings", "blocked_ranges"])
    logger.info(
        "Deleting property %s with %d bookings and %d blocked ranges",
        prop.id,
        len(prop.bookings),
        len(prop.blocked_ranges),
    )
    await db.delete(prop)
    await db.flush()


async def create_booking(db: AsyncSession, data: dict[str, Any]) -> Booking:
    """Insert a booking after verifying the property and the dates."""
    property_id = data["property_id"]
    await get_property(db, property_id)

    result = await check_stay(db, property_id, data["check_in"], data["check_out"])
    _raise_on_conflict(result, property_id)

    booking = Booking(**data)
    db.add(booking)
    await db.flush()
    await db.refresh(booking)
    logger.info(
        "Created booking %s on property %s (%s to %s)",
        booking.id,
        property_id,
        booking.check_in,
        booking.check_out,
    )
    return booking


async def update_booking(db: AsyncSession, booking: Booking, changes: dict[str, Any]) -> Booking:
    """Apply a partial update, re-running the conflict check when dates move."""
    if "property_id" in changes and changes["property_id"] != booking.property_id:
        await get_property(db, changes["property_id"])

    effective_property_id = changes.get("property_id", booking.property_id)
    effective_check_in = changes.get("check_in", booking.check_in)
    effective_check_out = changes.get("check_out", booking.check_out)

    dates_changed = "check_in" in changes or "check_out" in changes
    property_changed = effective_property_id != booking.property_id

    if dates_changed or property_changed:
        result = await check_stay(
            db,
            effective_property_id,
            effective_check_in,
            effective_check_out,
            exclude_id=booking.id,
        )
        _raise_on_conflict(result, effective_property_id)

    for field, value in changes.items():
        setattr(booking, field, value)

    db.add(booking)
    await db.flush()
    await db.refresh(booking)
    return booking


async def create_blocked_range(db: AsyncSession, data: dict[str, Any]) -> BlockedRange:
    """Insert a blocked range after verifying the property and the dates."""
    property_id = data["property_id"]
    await get_property(db, property_id)

    result = await check_block(db, property_id, data["start_date"], data["end_date"])
    _raise_on_conflict(result, property_id)

    blocked = BlockedRange(**data)
    db.add(blocked)
    await db.flush()
    await db.refresh(blocked)
    logger.info(
        "Blocked %s to %s on property %s (%s)",
        blocked.start_date,
        blocked.end_date,
        property_id,
        blocked.reason.value,
    )
    return blocked


async def delete_entity(db: AsyncSession, entity: Booking | BlockedRange) -> None:
    await db.delete(entity)
    await db.flush()
