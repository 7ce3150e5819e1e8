"""Tests for booking phases, horizon buckets and list summaries."""

import random
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from rentdar.calendar.bucketing import (
    BookingPhase,
    BookingStatus,
    booking_status,
    bucket_upcoming,
    classify,
    filter_bookings,
    group_bookings,
    horizon_boundaries,
    is_staying,
    summarize,
)
from rentdar.calendar.platforms import Platform

# Wednesday
NOW = datetime(2024, 3, 6, 10, 30)


class TestClassify:
    def test_three_phases(self, make_booking) -> None:
        assert classify(make_booking(date(2024, 3, 7), date(2024, 3, 9)), NOW) is BookingPhase.UPCOMING
        assert classify(make_booking(date(2024, 3, 4), date(2024, 3, 8)), NOW) is BookingPhase.CURRENT
        assert classify(make_booking(date(2024, 3, 1), date(2024, 3, 5)), NOW) is BookingPhase.PAST

    def test_checkout_today_is_still_current(self, make_booking) -> None:
        leaving = make_booking(date(2024, 3, 3), date(2024, 3, 6))
        assert classify(leaving, NOW) is BookingPhase.CURRENT
        assert is_staying(leaving, date(2024, 3, 6))

    def test_check_in_today_is_current(self, make_booking) -> None:
        assert classify(make_booking(date(2024, 3, 6), date(2024, 3, 9)), NOW) is BookingPhase.CURRENT

    def test_uses_calendar_timezone(self, make_booking) -> None:
        booking = make_booking(date(2024, 3, 7), date(2024, 3, 9))
        late_utc = datetime(2024, 3, 6, 23, 0, tzinfo=timezone.utc)
        assert classify(booking, late_utc, timezone.utc) is BookingPhase.UPCOMING
        assert classify(booking, late_utc, ZoneInfo("Asia/Tokyo")) is BookingPhase.CURRENT

    def test_phase_titles(self) -> None:
        assert BookingPhase.UPCOMING.title == "Upcoming"
        assert BookingPhase.PAST.title == "Past"

    def test_every_booking_lands_in_exactly_one_phase(self, make_booking) -> None:
        rng = random.Random(7)
        base = date(2024, 2, 20)
        bookings = []
        for _ in range(200):
            check_in = base + timedelta(days=rng.randint(0, 30))
            bookings.append(make_booking(check_in, check_in + timedelta(days=rng.randint(1, 6))))

        per_phase = [filter_bookings(bookings, phase, NOW) for phase in BookingPhase]
        ids = [b.id for group in per_phase for b in group]
        assert len(ids) == len(bookings)
        assert set(ids) == {b.id for b in bookings}


class TestFilterOrdering:
    def test_upcoming_ascends_and_past_descends(self, make_booking) -> None:
        a = make_booking(date(2024, 3, 20), date(2024, 3, 22))
        b = make_booking(date(2024, 3, 10), date(2024, 3, 12))
        c = make_booking(date(2024, 2, 1), date(2024, 2, 3))
        d = make_booking(date(2024, 2, 10), date(2024, 2, 12))

        assert filter_bookings([a, b, c, d], BookingPhase.UPCOMING, NOW) == [b, a]
        assert filter_bookings([a, b, c, d], BookingPhase.PAST, NOW) == [d, c]


class TestBuckets:
    def test_horizon_boundaries(self) -> None:
        assert horizon_boundaries(NOW) == (date(2024, 3, 9), date(2024, 3, 16), date(2024, 3, 31))

    def test_saturday_closes_its_own_week(self) -> None:
        this_week, next_week, _ = horizon_boundaries(date(2024, 3, 9))
        assert this_week == date(2024, 3, 9)
        assert next_week == date(2024, 3, 16)

    def test_each_horizon_gets_its_booking(self, make_booking) -> None:
        stays = [
            make_booking(date(2024, 4, 5), date(2024, 4, 7), guest_name="April"),
            make_booking(date(2024, 3, 29), date(2024, 3, 31), guest_name="Late March"),
            make_booking(date(2024, 3, 14), date(2024, 3, 16), guest_name="Next Week"),
            make_booking(date(2024, 3, 8), date(2024, 3, 10), guest_name="This Week"),
        ]
        groups = bucket_upcoming(stays, NOW)

        assert [g.title for g in groups] == ["This Week", "Next Week", "Later This Month", "Upcoming"]
        assert [[b.guest_name for b in g.bookings] for g in groups] == [
            ["This Week"],
            ["Next Week"],
            ["Late March"],
            ["April"],
        ]

    def test_empty_buckets_are_omitted(self, make_booking) -> None:
        groups = bucket_upcoming([make_booking(date(2024, 4, 5), date(2024, 4, 7))], NOW)
        assert [g.key for g in groups] == ["future"]
        assert bucket_upcoming([], NOW) == []

    def test_boundary_days(self, make_booking) -> None:
        saturday = make_booking(date(2024, 3, 9), date(2024, 3, 10))
        sunday = make_booking(date(2024, 3, 10), date(2024, 3, 11))
        month_end = make_booking(date(2024, 3, 31), date(2024, 4, 2))
        groups = {g.key: g.bookings for g in bucket_upcoming([saturday, sunday, month_end], NOW)}

        assert groups["this-week"] == (saturday,)
        assert groups["next-week"] == (sunday,)
        assert groups["later"] == (month_end,)

    def test_current_and_past_are_not_bucketed(self, make_booking) -> None:
        current = make_booking(date(2024, 3, 5), date(2024, 3, 7))
        past = make_booking(date(2024, 3, 1), date(2024, 3, 3))
        assert bucket_upcoming([current, past], NOW) == []


class TestGroupBookings:
    def test_upcoming_uses_horizon_buckets(self, make_booking) -> None:
        groups = group_bookings([make_booking(date(2024, 3, 8), date(2024, 3, 9))], BookingPhase.UPCOMING, NOW)
        assert [g.key for g in groups] == ["this-week"]

    def test_other_phases_form_one_group(self, make_booking) -> None:
        current = make_booking(date(2024, 3, 5), date(2024, 3, 7))
        groups = group_bookings([current], BookingPhase.CURRENT, NOW)
        assert len(groups) == 1
        assert groups[0].title == "Current"
        assert groups[0].bookings == (current,)
        assert group_bookings([current], BookingPhase.PAST, NOW) == []


class TestStatusAndSummary:
    def test_status(self, make_booking) -> None:
        staying = make_booking(date(2024, 3, 5), date(2024, 3, 7), platform=Platform.AIRBNB)
        direct = make_booking(date(2024, 3, 10), date(2024, 3, 12), platform=Platform.DIRECT)
        channel = make_booking(date(2024, 3, 10), date(2024, 3, 12), platform="Booking")

        assert booking_status(staying, NOW) is BookingStatus.CHECKED_IN
        assert booking_status(direct, NOW) is BookingStatus.PENDING
        assert booking_status(channel, NOW) is BookingStatus.CONFIRMED

    def test_summarize(self, make_booking) -> None:
        summary = summarize(
            [
                make_booking(date(2024, 3, 10), date(2024, 3, 13), amount_minor=45000),
                make_booking(date(2024, 3, 20), date(2024, 3, 22), amount_minor=30000),
            ]
        )
        assert summary.total_bookings == 2
        assert summary.total_nights == 5
        assert summary.total_amount_minor == 75000

    def test_summarize_empty(self) -> None:
        summary = summarize([])
        assert (summary.total_bookings, summary.total_nights, summary.total_amount_minor) == (0, 0, 0)
