"""Pydantic v2 request/response schemas for booking endpoints."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rentdar.calendar.bucketing import BookingPhase, BookingStatus
from rentdar.calendar.platforms import Platform

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Schema for creating a new booking. ``check_out`` is exclusive."""

    property_id: uuid.UUID
    guest_name: str = Field(..., min_length=1, max_length=255)
    check_in: date
    check_out: date
    platform: Platform = Platform.DIRECT
    amount_minor: int = Field(0, ge=0)
    notes: str | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "BookingCreate":
        """Validate that check_out is strictly after check_in."""
        if self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self


class BookingUpdate(BaseModel):
    """Schema for partially updating a booking. All fields optional."""

    property_id: uuid.UUID | None = None
    guest_name: str | None = Field(None, min_length=1, max_length=255)
    check_in: date | None = None
    check_out: date | None = None
    platform: Platform | None = None
    amount_minor: int | None = Field(None, ge=0)
    notes: str | None = None

    @model_validator(mode="after")
    def reject_null_required(self) -> "BookingUpdate":
        """Only ``notes`` may be cleared; the other fields are omitted, never null."""
        nulled = sorted(
            name for name in self.model_fields_set if name != "notes" and getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"{', '.join(nulled)} cannot be null")
        return self

    @model_validator(mode="after")
    def check_dates(self) -> "BookingUpdate":
        """If both dates are provided, validate check_out > check_in."""
        if self.check_in is not None and self.check_out is not None and self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(BaseModel):
    """Standard booking response returned from CRUD operations."""

    id: uuid.UUID
    property_id: uuid.UUID
    guest_name: str
    check_in: date
    check_out: date
    platform: Platform
    amount_minor: int
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookingListItem(BookingResponse):
    """Booking row on the list screen, with its derived phase and status."""

    nights: int
    phase: BookingPhase
    status: BookingStatus


class BookingListResponse(BaseModel):
    """List of bookings, optionally filtered by phase."""

    items: list[BookingListItem]
    total: int


class BookingGroupResponse(BaseModel):
    key: str
    title: str
    bookings: list[BookingListItem]


class BookingSummaryResponse(BaseModel):
    total_bookings: int
    total_nights: int
    total_amount_minor: int


class BookingGroupsResponse(BaseModel):
    """Grouped list for one phase plus the totals shown above it."""

    phase: BookingPhase
    groups: list[BookingGroupResponse]
    summary: BookingSummaryResponse
