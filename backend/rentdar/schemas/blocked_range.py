"""Pydantic v2 request/response schemas for blocked-date endpoints."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rentdar.models.blocked_range import BlockReason


class BlockedRangeCreate(BaseModel):
    """Schema for blocking dates. Both ``start_date`` and ``end_date`` are closed."""

    property_id: uuid.UUID
    start_date: date
    end_date: date
    reason: BlockReason = BlockReason.OTHER
    note: str | None = Field(None, max_length=500)

    @model_validator(mode="after")
    def check_dates(self) -> "BlockedRangeCreate":
        """A block may cover a single day but must not end before it starts."""
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class BlockedRangeResponse(BaseModel):
    id: uuid.UUID
    property_id: uuid.UUID
    start_date: date
    end_date: date
    reason: BlockReason
    note: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BlockedRangeListResponse(BaseModel):
    items: list[BlockedRangeResponse]
    total: int
