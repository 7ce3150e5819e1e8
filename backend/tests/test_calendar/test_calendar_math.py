"""Tests for month-grid date helpers."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from rentdar.calendar.calendar_math import (
    MONDAY,
    date_for_day,
    days_in_month,
    first_weekday_offset,
    is_in_range,
    is_same_day,
    iter_days,
    month_end,
    month_start,
    shift_month,
    start_of_day,
    weekday_number,
)


class TestDaysInMonth:
    @pytest.mark.parametrize(
        ("anchor", "expected"),
        [
            (date(2024, 3, 15), 31),
            (date(2024, 4, 1), 30),
            (date(2024, 2, 10), 29),
            (date(2023, 2, 10), 28),
            (date(1900, 2, 1), 28),
            (date(2000, 2, 1), 29),
        ],
    )
    def test_counts(self, anchor: date, expected: int) -> None:
        assert days_in_month(anchor) == expected

    def test_accepts_datetime(self) -> None:
        assert days_in_month(datetime(2024, 3, 31, 23, 59)) == 31

    def test_month_bounds(self) -> None:
        assert month_start(date(2024, 3, 17)) == date(2024, 3, 1)
        assert month_end(date(2024, 2, 3)) == date(2024, 2, 29)


class TestWeekdays:
    def test_weekday_number_is_sunday_based(self) -> None:
        assert weekday_number(date(2024, 3, 3)) == 1  # Sunday
        assert weekday_number(date(2024, 3, 6)) == 4  # Wednesday
        assert weekday_number(date(2024, 3, 9)) == 7  # Saturday

    def test_first_weekday_offset_sunday_first(self) -> None:
        # 1 March 2024 is a Friday: five empty cells (Sun..Thu)
        assert first_weekday_offset(date(2024, 3, 20)) == 5
        # 1 September 2024 is a Sunday
        assert first_weekday_offset(date(2024, 9, 1)) == 0
        # 1 June 2024 is a Saturday
        assert first_weekday_offset(date(2024, 6, 1)) == 6

    def test_first_weekday_offset_monday_first(self) -> None:
        assert first_weekday_offset(date(2024, 3, 1), MONDAY) == 4
        assert first_weekday_offset(date(2024, 9, 1), MONDAY) == 6
        assert first_weekday_offset(date(2024, 4, 1), MONDAY) == 0


class TestDateForDay:
    def test_in_range(self) -> None:
        assert date_for_day(date(2024, 3, 20), 10) == date(2024, 3, 10)

    def test_clamps_out_of_range_days(self) -> None:
        assert date_for_day(date(2024, 2, 1), 31) == date(2024, 2, 29)
        assert date_for_day(date(2024, 2, 1), 0) == date(2024, 2, 1)
        assert date_for_day(date(2024, 2, 1), -5) == date(2024, 2, 1)


class TestShiftMonth:
    def test_forward_and_back(self) -> None:
        assert shift_month(date(2024, 3, 15), 1) == date(2024, 4, 15)
        assert shift_month(date(2024, 3, 15), -1) == date(2024, 2, 15)

    def test_crosses_years(self) -> None:
        assert shift_month(date(2024, 12, 5), 1) == date(2025, 1, 5)
        assert shift_month(date(2024, 1, 5), -1) == date(2023, 12, 5)
        assert shift_month(date(2024, 1, 5), -25) == date(2021, 12, 5)

    def test_falls_back_to_month_start_when_day_missing(self) -> None:
        assert shift_month(date(2024, 1, 31), 1) == date(2024, 2, 1)
        assert shift_month(date(2024, 3, 30), -1) == date(2024, 2, 1)

    def test_zero_delta(self) -> None:
        assert shift_month(date(2024, 5, 31), 0) == date(2024, 5, 31)


class TestStartOfDay:
    def test_truncates_datetime(self) -> None:
        assert start_of_day(datetime(2024, 3, 6, 23, 59, 59)) == date(2024, 3, 6)

    def test_passes_dates_through(self) -> None:
        assert start_of_day(date(2024, 3, 6)) == date(2024, 3, 6)

    def test_converts_to_calendar_timezone(self) -> None:
        late_utc = datetime(2024, 3, 6, 23, 30, tzinfo=timezone.utc)
        assert start_of_day(late_utc, ZoneInfo("Asia/Makassar")) == date(2024, 3, 7)
        assert start_of_day(late_utc, ZoneInfo("America/New_York")) == date(2024, 3, 6)

    def test_is_same_day(self) -> None:
        assert is_same_day(datetime(2024, 3, 6, 1), date(2024, 3, 6))
        assert not is_same_day(date(2024, 3, 6), date(2024, 3, 7))


class TestRanges:
    def test_exclusive_end(self) -> None:
        assert is_in_range(date(2024, 3, 10), date(2024, 3, 10), date(2024, 3, 13))
        assert not is_in_range(date(2024, 3, 13), date(2024, 3, 10), date(2024, 3, 13))

    def test_inclusive_end(self) -> None:
        assert is_in_range(date(2024, 3, 13), date(2024, 3, 10), date(2024, 3, 13), inclusive_end=True)

    def test_iter_days(self) -> None:
        start = date(2024, 2, 27)
        assert list(iter_days(start, start + timedelta(days=3))) == [
            date(2024, 2, 27),
            date(2024, 2, 28),
            date(2024, 2, 29),
        ]
        assert list(iter_days(start, start)) == []
        assert list(iter_days(start, start - timedelta(days=2))) == []
