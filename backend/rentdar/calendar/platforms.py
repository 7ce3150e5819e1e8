"""Booking platforms and their display attributes."""

import enum
from dataclasses import dataclass


class Platform(str, enum.Enum):
    """Channel a booking came through."""

    AIRBNB = "Airbnb"
    BOOKING = "Booking"
    VRBO = "Vrbo"
    DIRECT = "Direct"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: "str | Platform | None") -> "Platform":
        """Case-insensitive lookup; missing values are Direct, unknown ones Other."""
        if isinstance(value, Platform):
            return value
        if not value:
            return cls.DIRECT
        lowered = value.strip().lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        return cls.OTHER

    @property
    def style(self) -> "PlatformStyle":
        return PLATFORM_STYLES[self]


@dataclass(frozen=True)
class PlatformStyle:
    display_name: str
    color: str
    tinted_background: str


PLATFORM_STYLES: dict[Platform, PlatformStyle] = {
    Platform.AIRBNB: PlatformStyle("Airbnb", "#EF4444", "#FEE2E2"),
    Platform.BOOKING: PlatformStyle("Booking.com", "#3B82F6", "#DBEAFE"),
    Platform.VRBO: PlatformStyle("VRBO", "#8B5CF6", "#EDE9FE"),
    Platform.DIRECT: PlatformStyle("Direct", "#F59E0B", "#FEF3C7"),
    Platform.OTHER: PlatformStyle("Other", "#9CA3AF", "#F3F4F6"),
}
