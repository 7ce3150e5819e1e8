"""Occupancy rates from booked nights."""

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from rentdar.calendar.calendar_math import days_in_month, iter_days, month_end, month_start
from rentdar.calendar.types import BookingLike


def _booked_dates(bookings: Iterable[BookingLike], period_start: date, period_end: date) -> set[date]:
    # A set of dates so overlapping bookings are not double-counted
    booked: set[date] = set()
    for booking in bookings:
        booked.update(iter_days(max(booking.check_in, period_start), min(booking.check_out, period_end)))
    return booked


def occupancy_for_period(
    bookings: Iterable[BookingLike],
    period_start: date,
    period_end: date,
) -> tuple[int, int]:
    """Booked days within ``[period_start, period_end)``.

    Returns:
        A tuple of (total_days, booked_days).
    """
    total_days = (period_end - period_start).days
    if total_days <= 0:
        return 0, 0
    return total_days, len(_booked_dates(bookings, period_start, period_end))


def booked_days(month_anchor: date | datetime, bookings: Iterable[BookingLike]) -> int:
    """Distinct days of the month covered by at least one stay."""
    first = month_start(month_anchor)
    after_last = month_end(month_anchor) + timedelta(days=1)
    return len(_booked_dates(bookings, first, after_last))


def occupancy_percent(month_anchor: date | datetime, bookings: Iterable[BookingLike]) -> float:
    """Percentage (0-100) of the month's days covered by a stay."""
    total = days_in_month(month_anchor)
    booked = booked_days(month_anchor, bookings)
    if total <= 0 or booked == 0:
        return 0.0
    return min(100.0, booked * 100.0 / total)


def rate(booked: int, total: int) -> Decimal:
    """``booked / total`` as a percentage rounded to two places."""
    if total <= 0:
        return Decimal("0.00")
    value = Decimal(booked * 100) / Decimal(total)
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
