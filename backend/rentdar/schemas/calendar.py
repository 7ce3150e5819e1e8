"""Pydantic v2 schemas for the month calendar and date selection."""

import uuid
from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator

from rentdar.calendar.availability import CalendarDay, DayClassification
from rentdar.calendar.conflicts import ConflictReason
from rentdar.calendar.platforms import Platform
from rentdar.calendar.selection import SelectionPhase, SelectionState
from rentdar.models.blocked_range import BlockReason
from rentdar.schemas.booking import BookingResponse

# ---------------------------------------------------------------------------
# Month view
# ---------------------------------------------------------------------------


class CalendarDayResponse(BaseModel):
    """One cell of the month grid."""

    day_number: int
    date: date
    classification: DayClassification
    platforms: list[Platform] = []
    blocked_range_id: uuid.UUID | None = None
    block_reason: BlockReason | None = None

    @classmethod
    def from_day(cls, day: CalendarDay) -> "CalendarDayResponse":
        blocked = day.blocked_range
        return cls(
            day_number=day.day_number,
            date=day.date,
            classification=day.classification,
            platforms=list(day.platforms),
            blocked_range_id=blocked.id if blocked is not None else None,
            block_reason=blocked.reason if blocked is not None else None,
        )


class MonthCalendarResponse(BaseModel):
    year: int
    month: int
    today: date
    days_in_month: int
    first_weekday_offset: int
    previous_month: date
    next_month: date
    days: list[CalendarDayResponse]
    booked_days: int
    occupancy_percent: float


class DayBookingsResponse(BaseModel):
    """Stays touching a single day (the selected-day panel)."""

    date: date
    classification: DayClassification
    bookings: list[BookingResponse]


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class SelectionStateSchema(BaseModel):
    """Wire form of :class:`SelectionState`; the client sends it back each tap."""

    phase: SelectionPhase = SelectionPhase.EMPTY
    start: date | None = None
    end: date | None = None

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="after")
    def check_shape(self) -> "SelectionStateSchema":
        # SelectionState rejects impossible combinations with ValueError
        self.to_state()
        return self

    def to_state(self) -> SelectionState:
        return SelectionState(self.phase, self.start, self.end)


class SelectionRequest(BaseModel):
    """Apply a tap (or a reset) to the client's current selection."""

    action: Literal["tap", "reset"] = "tap"
    state: SelectionStateSchema = SelectionStateSchema()
    day: date | None = None
    property_id: uuid.UUID | None = None

    @model_validator(mode="after")
    def check_date(self) -> "SelectionRequest":
        if self.action == "tap" and self.day is None:
            raise ValueError("day is required for a tap")
        return self


class SelectionResponse(BaseModel):
    state: SelectionStateSchema
    accepted: bool
    rejected_classification: DayClassification | None = None
    nights: int
    suggested_check_out: date | None = None
    conflict_reason: ConflictReason | None = None
    conflict_message: str | None = None


# ---------------------------------------------------------------------------
# Dry-run validation
# ---------------------------------------------------------------------------


class AvailabilityCheckRequest(BaseModel):
    property_id: uuid.UUID
    start: date
    end: date
    kind: Literal["stay", "block"] = "stay"
    exclude_id: uuid.UUID | None = None


class AvailabilityCheckResponse(BaseModel):
    ok: bool
    reason: ConflictReason | None = None
    message: str | None = None
    conflicting_id: uuid.UUID | None = None
