"""Seed the database with sample properties, stays and blocked dates.

Dates are generated relative to today so the calendar always has something
in the current month, the next two weeks and the past.

Run from the ``backend`` directory:
    python -m scripts.seed_data
"""

import asyncio
import sys
from datetime import timedelta
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete

from rentdar.calendar.platforms import Platform
from rentdar.database import async_session_factory, engine, init_db
from rentdar.models.blocked_range import BlockedRange, BlockReason
from rentdar.models.booking import Booking
from rentdar.models.property import Property
from rentdar.services import calendar_service
from rentdar.services.clock import get_clock
from rentdar.services.errors import BookingConflictError

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

PROPERTIES = [
    {"name": "Harbour Loft", "location": "Lisbon", "description": "Two-bedroom loft above the river."},
    {"name": "Pine Cabin", "location": "Tahoe", "description": "Lakeside cabin with a wood stove."},
    {"name": "Old Town Studio", "location": "Porto", "description": "Compact studio near the cathedral."},
]

# (property index, guest, check-in offset, nights, platform, amount in cents)
STAYS = [
    (0, "Sarah Mitchell", -20, 4, Platform.AIRBNB, 52000),
    (0, "Tom Becker", -3, 5, Platform.BOOKING, 61000),
    (0, "Aiko Tanaka", 4, 3, Platform.DIRECT, 39000),
    (0, "Luis Ortega", 12, 6, Platform.VRBO, 78000),
    (1, "Emma Novak", -1, 2, Platform.AIRBNB, 30000),
    (1, "Noah Reed", 1, 4, Platform.AIRBNB, 58000),
    (1, "Priya Raman", 30, 7, Platform.BOOKING, 91000),
    (2, "Jonas Berg", 8, 2, Platform.OTHER, 18000),
    # Overlaps Tom Becker's stay and is refused by the conflict check
    (0, "Conflicting Guest", -1, 2, Platform.DIRECT, 10000),
]

# (property index, start offset, end offset inclusive, reason)
BLOCKS = [
    (0, 20, 22, BlockReason.MAINTENANCE),
    (2, 0, 3, BlockReason.PERSONAL),
]


async def seed() -> None:
    """Replace all calendar data with the sample set."""
    await init_db()

    async with async_session_factory() as session:
        for model in (Booking, BlockedRange, Property):
            await session.execute(delete(model))
        await session.flush()

        created_properties: list[Property] = []
        for prop_data in PROPERTIES:
            prop = await calendar_service.create_property(session, prop_data)
            created_properties.append(prop)
            print(f"   🏠 {prop.name} ({prop.location})")

        today = get_clock().today()

        block_count = 0
        for index, start, end, reason in BLOCKS:
            await calendar_service.create_blocked_range(
                session,
                {
                    "property_id": created_properties[index].id,
                    "start_date": today + timedelta(days=start),
                    "end_date": today + timedelta(days=end),
                    "reason": reason,
                },
            )
            block_count += 1

        booking_count = 0
        for index, guest, offset, nights, platform, amount in STAYS:
            check_in = today + timedelta(days=offset)
            try:
                await calendar_service.create_booking(
                    session,
                    {
                        "property_id": created_properties[index].id,
                        "guest_name": guest,
                        "check_in": check_in,
                        "check_out": check_in + timedelta(days=nights),
                        "platform": platform,
                        "amount_minor": amount,
                    },
                )
                booking_count += 1
            except BookingConflictError as exc:
                print(f"⚠️  Skipped {guest}: {exc}")

        await session.commit()

        print()
        print("=" * 60)
        print("📊 Seed Summary")
        print("=" * 60)
        print(f"   Properties:     {len(created_properties)}")
        print(f"   Bookings:       {booking_count}")
        print(f"   Blocked ranges: {block_count}")
        print("=" * 60)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
