"""Pre-commit overlap checks for new stays and blocked dates.

Candidates are half-open ``[start, end)`` like bookings. Validation never
raises; it returns :class:`Ok` or a :class:`Conflict` naming the record in
the way.
"""

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Union

from rentdar.calendar.types import BlockedRangeLike, BookingLike, covers_nights, is_well_formed_block


class ConflictReason(str, enum.Enum):
    INVALID_RANGE = "invalid_range"
    BOOKING_OVERLAP = "booking_overlap"
    BLOCKED_OVERLAP = "blocked_overlap"


@dataclass(frozen=True)
class DateRange:
    """A candidate stay, ``end`` exclusive."""

    start: date
    end: date

    @property
    def nights(self) -> int:
        return max((self.end - self.start).days, 0)


@dataclass(frozen=True)
class Ok:
    ok: bool = True


@dataclass(frozen=True)
class Conflict:
    reason: ConflictReason
    conflicting_entity: BookingLike | BlockedRangeLike | None = None
    ok: bool = False

    def describe(self) -> str:
        """Short text naming what is in the way (guest name or block reason)."""
        entity = self.conflicting_entity
        if self.reason is ConflictReason.INVALID_RANGE or entity is None:
            return "Check-out must be after check-in"
        if self.reason is ConflictReason.BOOKING_OVERLAP:
            return f"Overlaps the stay of {entity.guest_name}"  # type: ignore[union-attr]
        reason = getattr(entity.reason, "value", entity.reason)  # type: ignore[union-attr]
        return f"Dates are blocked: {reason}"


ValidationResult = Union[Ok, Conflict]


def overlaps_booking(candidate: DateRange, booking: BookingLike) -> bool:
    """Half-open overlap: ``a1 < b2 and b1 < a2``."""
    return candidate.start < booking.check_out and booking.check_in < candidate.end


def overlaps_blocked(candidate: DateRange, blocked: BlockedRangeLike) -> bool:
    """Overlap against an inclusive block: ``a1 <= b2 and b1 < a2``."""
    return candidate.start <= blocked.end_date and blocked.start_date < candidate.end


def validate(
    candidate: DateRange,
    existing_bookings: Iterable[BookingLike],
    existing_blocked: Iterable[BlockedRangeLike],
    exclude_id: object | None = None,
) -> ValidationResult:
    """Check ``candidate`` against a property's stays and blocked ranges.

    ``exclude_id`` skips the record being edited. Stays are checked before
    blocked ranges; within each, the earliest conflicting record is reported.
    Stays with no nights and blocks that end before they start are ignored.
    """
    if not candidate.start < candidate.end:
        return Conflict(ConflictReason.INVALID_RANGE)

    stays = sorted(
        (b for b in existing_bookings if covers_nights(b) and (exclude_id is None or b.id != exclude_id)),
        key=lambda b: b.check_in,
    )
    for booking in stays:
        if overlaps_booking(candidate, booking):
            return Conflict(ConflictReason.BOOKING_OVERLAP, booking)

    blocks = sorted(
        (b for b in existing_blocked if is_well_formed_block(b) and (exclude_id is None or b.id != exclude_id)),
        key=lambda b: b.start_date,
    )
    for blocked in blocks:
        if overlaps_blocked(candidate, blocked):
            return Conflict(ConflictReason.BLOCKED_OVERLAP, blocked)

    return Ok()


def validate_block(
    start_date: date,
    end_date: date,
    existing_bookings: Iterable[BookingLike],
    existing_blocked: Iterable[BlockedRangeLike],
    exclude_id: object | None = None,
) -> ValidationResult:
    """Validate an inclusive ``[start_date, end_date]`` block.

    The block closes every night through ``end_date``, so it is checked as
    the half-open candidate ``[start_date, end_date + 1 day)``.
    """
    if end_date < start_date:
        return Conflict(ConflictReason.INVALID_RANGE)
    return validate(
        DateRange(start_date, end_date + timedelta(days=1)),
        existing_bookings,
        existing_blocked,
        exclude_id=exclude_id,
    )
