"""Structural types the calendar engine reads from.

ORM rows and plain dataclasses both satisfy these protocols, so the engine
never depends on the persistence layer.
"""

import uuid
from datetime import date
from typing import Protocol

from rentdar.calendar.platforms import Platform


class BookingLike(Protocol):
    """A stay occupying the nights ``[check_in, check_out)``."""

    id: uuid.UUID | None
    property_id: uuid.UUID | None
    guest_name: str
    check_in: date
    check_out: date
    platform: Platform | str | None
    amount_minor: int


class BlockedRangeLike(Protocol):
    """Dates closed by the owner, ``[start_date, end_date]`` inclusive."""

    id: uuid.UUID | None
    property_id: uuid.UUID | None
    start_date: date
    end_date: date
    reason: str


def covers_nights(booking: BookingLike) -> bool:
    """False for malformed bookings (``check_in >= check_out``)."""
    return booking.check_in < booking.check_out


def is_well_formed_block(blocked: BlockedRangeLike) -> bool:
    return blocked.start_date <= blocked.end_date
