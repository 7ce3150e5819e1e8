"""BlockedRange model: dates closed by the owner, both ends inclusive."""

import enum
import uuid
from datetime import date

from sqlalchemy import Date, Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentdar.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class BlockReason(str, enum.Enum):
    PERSONAL = "personal"
    MAINTENANCE = "maintenance"
    RENOVATION = "renovation"
    OTHER = "other"


class BlockedRange(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Dates ``[start_date, end_date]`` on which a property cannot be booked."""

    __tablename__ = "blocked_ranges"

    property_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[BlockReason] = mapped_column(
        Enum(BlockReason, native_enum=False, values_callable=lambda e: [m.value for m in e], length=20),
        default=BlockReason.OTHER,
        nullable=False,
    )
    note: Mapped[str | None] = mapped_column(String(500), nullable=True)

    property: Mapped["Property"] = relationship(back_populates="blocked_ranges", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (Index("ix_blocked_ranges_start_date", "start_date"),)

    def __repr__(self) -> str:
        return f"<BlockedRange(id={self.id}, start={self.start_date}, end={self.end_date}, reason={self.reason})>"
