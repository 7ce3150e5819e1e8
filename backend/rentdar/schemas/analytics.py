"""Pydantic v2 schemas for analytics endpoints."""

import uuid
from decimal import Decimal

from pydantic import BaseModel


class OccupancyResponse(BaseModel):
    """Occupancy statistics for a single property over one month."""

    property_id: uuid.UUID | None = None
    property_name: str | None = None
    year: int
    month: int
    total_days: int
    booked_days: int
    occupancy_rate: Decimal  # percentage 0.00–100.00


class OccupancySummaryResponse(BaseModel):
    """Aggregated occupancy statistics across all (or filtered) properties."""

    year: int
    month: int
    properties: list[OccupancyResponse]
    overall_occupancy_rate: Decimal
