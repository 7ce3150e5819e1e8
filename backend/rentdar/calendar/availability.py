"""Per-day availability classification for a month view.

A day is, in order of precedence:

1. ``blocked`` when a blocked range covers it (``start_date <= d <= end_date``),
2. ``booked`` when a stay covers it (``check_in <= d < check_out``),
3. ``past`` when it lies before today,
4. ``free`` otherwise.

The checkout day of a stay is therefore free for the next guest, whereas the
last day of a blocked range stays closed.
"""

import enum
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from rentdar.calendar.calendar_math import date_for_day, days_in_month, month_end, month_start, start_of_day
from rentdar.calendar.platforms import Platform
from rentdar.calendar.types import BlockedRangeLike, BookingLike, covers_nights, is_well_formed_block

logger = logging.getLogger(__name__)

DEFAULT_MAX_PLATFORM_DOTS = 3


class DayClassification(str, enum.Enum):
    FREE = "free"
    BOOKED = "booked"
    BLOCKED = "blocked"
    PAST = "past"


# Days a new stay may start or end on.
TAPPABLE = frozenset({DayClassification.FREE})


def is_tappable(classification: DayClassification) -> bool:
    return classification in TAPPABLE


@dataclass(frozen=True)
class CalendarDay:
    """One rendered cell of the month grid."""

    day_number: int
    date: date
    classification: DayClassification
    platforms: tuple[Platform, ...] = ()
    blocked_range: BlockedRangeLike | None = field(default=None, compare=False)


def _blocked_in_start_order(blocked_ranges: Iterable[BlockedRangeLike]) -> list[BlockedRangeLike]:
    valid = []
    for blocked in blocked_ranges:
        if is_well_formed_block(blocked):
            valid.append(blocked)
        else:
            logger.debug("Skipping blocked range %s with end before start", blocked.id)
    # sorted() is stable, so equal start dates keep insertion order
    return sorted(valid, key=lambda b: b.start_date)


def _valid_bookings(bookings: Iterable[BookingLike]) -> list[BookingLike]:
    valid = []
    for booking in bookings:
        if covers_nights(booking):
            valid.append(booking)
        else:
            logger.debug("Skipping booking %s with no nights", booking.id)
    return valid


def build_availability(
    month_anchor: date | datetime,
    bookings: Iterable[BookingLike],
    blocked_ranges: Iterable[BlockedRangeLike],
    today: date | datetime,
    max_platform_dots: int = DEFAULT_MAX_PLATFORM_DOTS,
) -> dict[int, CalendarDay]:
    """Classify every day of the month containing ``month_anchor``.

    ``bookings`` and ``blocked_ranges`` may span several properties (the "all
    properties" filter); a day is booked or blocked if any of them covers it,
    and its platform dots are the union across properties.

    Returns a mapping with exactly one entry per day number ``1..days_in_month``.
    """
    first = month_start(month_anchor)
    last = month_end(month_anchor)
    today_day = start_of_day(today)

    blocked_sorted = _blocked_in_start_order(blocked_ranges)
    stays = [b for b in _valid_bookings(bookings) if b.check_in <= last and b.check_out > first]

    days: dict[int, CalendarDay] = {}
    for day_number in range(1, days_in_month(month_anchor) + 1):
        day = date_for_day(first, day_number)

        blocking = next((b for b in blocked_sorted if b.start_date <= day <= b.end_date), None)
        if blocking is not None:
            days[day_number] = CalendarDay(day_number, day, DayClassification.BLOCKED, blocked_range=blocking)
            continue

        platforms: list[Platform] = []
        touched = False
        for booking in stays:
            if booking.check_in <= day < booking.check_out:
                touched = True
                platform = Platform.parse(booking.platform)
                if platform not in platforms:
                    platforms.append(platform)
        if touched:
            days[day_number] = CalendarDay(
                day_number, day, DayClassification.BOOKED, platforms=tuple(platforms[:max_platform_dots])
            )
        elif day < today_day:
            days[day_number] = CalendarDay(day_number, day, DayClassification.PAST)
        else:
            days[day_number] = CalendarDay(day_number, day, DayClassification.FREE)

    return days


def unavailable_days(
    month_anchor: date | datetime,
    bookings: Iterable[BookingLike],
    blocked_ranges: Iterable[BlockedRangeLike],
) -> tuple[set[int], set[int]]:
    """Day numbers of the month that are ``(booked, blocked)``.

    Unlike :func:`build_availability` the two sets may overlap.
    """
    first = month_start(month_anchor)
    last = month_end(month_anchor)
    booked: set[int] = set()
    blocked: set[int] = set()

    for booking in _valid_bookings(bookings):
        day = max(booking.check_in, first)
        while day < booking.check_out and day <= last:
            booked.add(day.day)
            day += timedelta(days=1)

    for blocked_range in _blocked_in_start_order(blocked_ranges):
        day = max(blocked_range.start_date, first)
        while day <= blocked_range.end_date and day <= last:
            blocked.add(day.day)
            day += timedelta(days=1)

    return booked, blocked


def bookings_for_day(day: date, bookings: Iterable[BookingLike]) -> list[BookingLike]:
    """Stays covering ``day``, de-duplicated by id and ordered by check-in."""
    seen: set[object] = set()
    matches: list[BookingLike] = []
    for booking in _valid_bookings(bookings):
        if not booking.check_in <= day < booking.check_out:
            continue
        key = booking.id if booking.id is not None else id(booking)
        if key in seen:
            continue
        seen.add(key)
        matches.append(booking)
    return sorted(matches, key=lambda b: b.check_in)


def is_day_unavailable(
    day: date,
    bookings: Sequence[BookingLike],
    blocked_ranges: Sequence[BlockedRangeLike],
) -> bool:
    """True if a stay or a blocked range covers ``day``."""
    if any(covers_nights(b) and b.check_in <= day < b.check_out for b in bookings):
        return True
    return any(b.start_date <= day <= b.end_date for b in blocked_ranges)


def next_available_checkout(
    check_in: date,
    bookings: Iterable[BookingLike],
    blocked_ranges: Iterable[BlockedRangeLike],
    search_limit_days: int = 365,
) -> date:
    """Earliest day after ``check_in`` that is neither booked nor blocked.

    Used as the default checkout once a check-in is picked. The search gives up
    after ``search_limit_days`` and returns the day it stopped on.
    """
    stays = _valid_bookings(bookings)
    blocks = _blocked_in_start_order(blocked_ranges)
    candidate = check_in + timedelta(days=1)
    for _ in range(search_limit_days):
        if not is_day_unavailable(candidate, stays, blocks):
            return candidate
        candidate += timedelta(days=1)
    return candidate
