"""Grouping of bookings for the bookings list.

Two distinct checkout rules are in play here:

* For "is the guest staying now", checkout is inclusive: a guest leaving
  today is still current today.
* Everywhere else (conflicts, day classification) checkout is exclusive.
"""

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo

from rentdar.calendar.calendar_math import month_end, start_of_day, weekday_number
from rentdar.calendar.platforms import Platform
from rentdar.calendar.types import BookingLike


class BookingPhase(str, enum.Enum):
    UPCOMING = "upcoming"
    CURRENT = "current"
    PAST = "past"

    @property
    def title(self) -> str:
        return self.value.capitalize()


class BookingStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    CHECKED_IN = "checked_in"


BUCKET_TITLES = {
    "this-week": "This Week",
    "next-week": "Next Week",
    "later": "Later This Month",
    "future": "Upcoming",
}


@dataclass(frozen=True)
class BookingGroup:
    key: str
    title: str
    bookings: tuple[BookingLike, ...]


@dataclass(frozen=True)
class BookingSummary:
    total_bookings: int
    total_nights: int
    total_amount_minor: int


def is_staying(booking: BookingLike, today: date) -> bool:
    """Checkout-inclusive stay test."""
    return booking.check_in <= today and booking.check_out >= today


def classify(booking: BookingLike, now: date | datetime, tz: tzinfo | None = None) -> BookingPhase:
    """Place a booking in exactly one of upcoming, current or past."""
    today = start_of_day(now, tz)
    if booking.check_in > today:
        return BookingPhase.UPCOMING
    if booking.check_out < today:
        return BookingPhase.PAST
    return BookingPhase.CURRENT


def filter_bookings(
    bookings: Iterable[BookingLike],
    phase: BookingPhase,
    now: date | datetime,
    tz: tzinfo | None = None,
) -> list[BookingLike]:
    """Bookings in ``phase``, sorted for display.

    Upcoming and current ascend by check-in, past descends (most recent first).
    """
    selected = [b for b in bookings if classify(b, now, tz) is phase]
    return sorted(selected, key=lambda b: b.check_in, reverse=phase is BookingPhase.PAST)


def horizon_boundaries(now: date | datetime, tz: tzinfo | None = None) -> tuple[date, date, date]:
    """``(end_of_this_week, end_of_next_week, month_end)`` relative to ``now``.

    Weeks end on Saturday (weekday 7 with 1 = Sunday).
    """
    today = start_of_day(now, tz)
    end_of_this_week = today + timedelta(days=7 - weekday_number(today))
    end_of_next_week = end_of_this_week + timedelta(days=7)
    return end_of_this_week, end_of_next_week, month_end(today)


def bucket_upcoming(
    bookings: Iterable[BookingLike],
    now: date | datetime,
    tz: tzinfo | None = None,
) -> list[BookingGroup]:
    """Split the upcoming bookings into time-horizon groups.

    Groups, in order: This Week, Next Week, Later This Month, Upcoming. The
    last one catches everything beyond the current month. Empty groups are
    left out.
    """
    end_of_this_week, end_of_next_week, last_of_month = horizon_boundaries(now, tz)
    buckets: dict[str, list[BookingLike]] = {
        "this-week": [],
        "next-week": [],
        "later": [],
        "future": [],
    }
    for booking in filter_bookings(bookings, BookingPhase.UPCOMING, now, tz):
        if booking.check_in <= end_of_this_week:
            buckets["this-week"].append(booking)
        elif booking.check_in <= end_of_next_week:
            buckets["next-week"].append(booking)
        elif booking.check_in <= last_of_month:
            buckets["later"].append(booking)
        else:
            buckets["future"].append(booking)

    return [
        BookingGroup(key, BUCKET_TITLES[key], tuple(items))
        for key, items in buckets.items()
        if items
    ]


def group_bookings(
    bookings: Iterable[BookingLike],
    phase: BookingPhase,
    now: date | datetime,
    tz: tzinfo | None = None,
) -> list[BookingGroup]:
    """List-screen groups: horizon buckets for upcoming, one group otherwise."""
    if phase is BookingPhase.UPCOMING:
        return bucket_upcoming(bookings, now, tz)
    selected = filter_bookings(bookings, phase, now, tz)
    if not selected:
        return []
    return [BookingGroup("all", phase.title, tuple(selected))]


def booking_status(booking: BookingLike, now: date | datetime, tz: tzinfo | None = None) -> BookingStatus:
    if is_staying(booking, start_of_day(now, tz)):
        return BookingStatus.CHECKED_IN
    if Platform.parse(booking.platform) is Platform.DIRECT:
        return BookingStatus.PENDING
    return BookingStatus.CONFIRMED


def booking_nights(booking: BookingLike) -> int:
    return max((booking.check_out - booking.check_in).days, 0)


def summarize(bookings: Iterable[BookingLike]) -> BookingSummary:
    total = nights = amount = 0
    for booking in bookings:
        total += 1
        nights += booking_nights(booking)
        amount += booking.amount_minor or 0
    return BookingSummary(total, nights, amount)
