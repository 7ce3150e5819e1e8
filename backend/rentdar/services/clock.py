"""Injectable wall clock.

Routers take the clock as a FastAPI dependency so tests can pin "now".
"""

from datetime import date, datetime, tzinfo

from rentdar.calendar.calendar_math import start_of_day
from rentdar.config import settings


class Clock:
    """Current time in the configured calendar timezone."""

    def __init__(self, tz: tzinfo) -> None:
        self.tz = tz

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        return start_of_day(self.now(), self.tz)


class FixedClock(Clock):
    """A clock stuck at one instant."""

    def __init__(self, instant: datetime, tz: tzinfo | None = None) -> None:
        super().__init__(tz or instant.tzinfo or settings.tzinfo)
        self.instant = instant

    def now(self) -> datetime:
        return self.instant


def get_clock() -> Clock:
    """FastAPI dependency returning the system clock."""
    return Clock(settings.tzinfo)
