"""Service-layer exceptions, translated to HTTP errors by the routers."""

from rentdar.calendar.conflicts import Conflict, ConflictReason


class NotFoundError(Exception):
    """A referenced property, booking or blocked range does not exist."""

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"{entity} not found")


class BookingConflictError(Exception):
    """A write was refused because its dates clash with the calendar."""

    def __init__(self, conflict: Conflict) -> None:
        self.conflict = conflict
        super().__init__(conflict.describe())

    @property
    def is_invalid_range(self) -> bool:
        return self.conflict.reason is ConflictReason.INVALID_RANGE
