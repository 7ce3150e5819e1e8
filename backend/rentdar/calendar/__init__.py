"""Booking availability and calendar engine.

Pure functions over in-memory bookings and blocked ranges. Nothing in this
package touches the database or reads the clock; callers pass ``now``/``today``.
"""

from rentdar.calendar.availability import (
    CalendarDay,
    DayClassification,
    bookings_for_day,
    build_availability,
    is_tappable,
    next_available_checkout,
    unavailable_days,
)
from rentdar.calendar.bucketing import (
    BookingGroup,
    BookingPhase,
    BookingStatus,
    BookingSummary,
    booking_status,
    bucket_upcoming,
    classify,
    filter_bookings,
    group_bookings,
    summarize,
)
from rentdar.calendar.conflicts import (
    Conflict,
    ConflictReason,
    DateRange,
    Ok,
    ValidationResult,
    validate,
    validate_block,
)
from rentdar.calendar.occupancy import occupancy_for_period, occupancy_percent
from rentdar.calendar.platforms import Platform
from rentdar.calendar.selection import (
    SelectionPhase,
    SelectionState,
    is_in_selected_range,
    reset,
    tap_day,
)

__all__ = [
    "BookingGroup",
    "BookingPhase",
    "BookingStatus",
    "BookingSummary",
    "CalendarDay",
    "Conflict",
    "ConflictReason",
    "DateRange",
    "DayClassification",
    "Ok",
    "Platform",
    "SelectionPhase",
    "SelectionState",
    "ValidationResult",
    "booking_status",
    "bookings_for_day",
    "bucket_upcoming",
    "build_availability",
    "classify",
    "filter_bookings",
    "group_bookings",
    "is_in_selected_range",
    "is_tappable",
    "next_available_checkout",
    "occupancy_for_period",
    "occupancy_percent",
    "reset",
    "summarize",
    "tap_day",
    "unavailable_days",
    "validate",
    "validate_block",
]
