"""Date-grid helpers for month calendars.

Everything here is a pure function of its arguments. Days are represented as
``datetime.date`` values; a ``datetime`` is reduced to its calendar day with
:func:`start_of_day` before any comparison, so callers may pass either.
"""

import calendar
from collections.abc import Iterator
from datetime import date, datetime, timedelta, tzinfo

SUNDAY = 1
MONDAY = 2


def start_of_day(value: date | datetime, tz: tzinfo | None = None) -> date:
    """Truncate ``value`` to its calendar day.

    Aware datetimes are converted to ``tz`` first when one is given, so that
    "today" follows the configured calendar rather than the server clock.
    """
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def month_start(month_anchor: date | datetime) -> date:
    """First day of the month containing ``month_anchor``."""
    return start_of_day(month_anchor).replace(day=1)


def days_in_month(month_anchor: date | datetime) -> int:
    """Number of days (28-31) in the month containing ``month_anchor``."""
    anchor = start_of_day(month_anchor)
    return calendar.monthrange(anchor.year, anchor.month)[1]


def month_end(month_anchor: date | datetime) -> date:
    """Last day of the month containing ``month_anchor``."""
    return month_start(month_anchor).replace(day=days_in_month(month_anchor))


def weekday_number(value: date | datetime) -> int:
    """Weekday as 1=Sunday .. 7=Saturday."""
    # date.isoweekday(): Monday=1 .. Sunday=7
    return start_of_day(value).isoweekday() % 7 + 1


def first_weekday_offset(month_anchor: date | datetime, first_weekday: int = SUNDAY) -> int:
    """Leading empty cells before day 1 in a 7-column grid.

    With the default Sunday-first layout this is ``weekday_number(first) - 1``.
    """
    return (weekday_number(month_start(month_anchor)) - first_weekday) % 7


def date_for_day(month_anchor: date | datetime, day: int) -> date:
    """Date of ``day`` within the month of ``month_anchor``.

    ``day`` is clamped into ``[1, days_in_month]``.
    """
    day = min(max(day, 1), days_in_month(month_anchor))
    return month_start(month_anchor).replace(day=day)


def shift_month(month_anchor: date | datetime, delta: int) -> date:
    """Move ``delta`` months, keeping the day-of-month when it exists.

    When the target month is too short (e.g. Jan 31 + 1), the first of the
    target month is returned.
    """
    anchor = start_of_day(month_anchor)
    index = anchor.year * 12 + (anchor.month - 1) + delta
    year, month = divmod(index, 12)
    target = date(year, month + 1, 1)
    if anchor.day <= days_in_month(target):
        return target.replace(day=anchor.day)
    return target


def is_same_day(a: date | datetime, b: date | datetime, tz: tzinfo | None = None) -> bool:
    return start_of_day(a, tz) == start_of_day(b, tz)


def is_in_range(day: date, start: date, end: date, inclusive_end: bool = False) -> bool:
    """``start <= day < end``, or ``start <= day <= end`` with ``inclusive_end``."""
    if inclusive_end:
        return start <= day <= end
    return start <= day < end


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each day in ``[start, end)``. Yields nothing when ``end <= start``."""
    day = start
    while day < end:
        yield day
        day += timedelta(days=1)
