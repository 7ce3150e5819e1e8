"""In-memory records for the pure calendar engine tests (no database)."""

import uuid
from dataclasses import dataclass, field
from datetime import date

import pytest

from rentdar.calendar.platforms import Platform


@dataclass
class StubBooking:
    check_in: date
    check_out: date
    platform: Platform | str | None = Platform.DIRECT
    guest_name: str = "Guest"
    amount_minor: int = 0
    property_id: uuid.UUID | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class StubBlockedRange:
    start_date: date
    end_date: date
    reason: str = "maintenance"
    property_id: uuid.UUID | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@pytest.fixture
def make_booking():
    def _make(check_in: date, check_out: date, **kwargs) -> StubBooking:
        return StubBooking(check_in, check_out, **kwargs)

    return _make


@pytest.fixture
def make_block():
    def _make(start_date: date, end_date: date, **kwargs) -> StubBlockedRange:
        return StubBlockedRange(start_date, end_date, **kwargs)

    return _make
