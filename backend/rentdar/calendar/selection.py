"""Two-tap check-in/check-out selection.

The selection is a plain immutable value. Callers keep it (in UI state, or in
the request body for the HTTP API) and feed it back into :func:`tap_day`.
Availability is not checked here: callers must drop taps on days that are not
tappable before calling in.
"""

import enum
from dataclasses import dataclass
from datetime import date


class SelectionPhase(str, enum.Enum):
    EMPTY = "empty"
    START_ONLY = "start_only"
    COMPLETE = "complete"


@dataclass(frozen=True)
class SelectionState:
    phase: SelectionPhase = SelectionPhase.EMPTY
    start: date | None = None
    end: date | None = None

    def __post_init__(self) -> None:
        if self.phase is SelectionPhase.EMPTY and (self.start is not None or self.end is not None):
            raise ValueError("an empty selection has no dates")
        if self.phase is SelectionPhase.START_ONLY and (self.start is None or self.end is not None):
            raise ValueError("a start-only selection has exactly a start date")
        if self.phase is SelectionPhase.COMPLETE:
            if self.start is None or self.end is None:
                raise ValueError("a complete selection needs both dates")
            if not self.start < self.end:
                raise ValueError("selection end must be after its start")

    @classmethod
    def empty(cls) -> "SelectionState":
        return cls()

    @classmethod
    def start_only(cls, start: date) -> "SelectionState":
        return cls(SelectionPhase.START_ONLY, start)

    @classmethod
    def complete(cls, start: date, end: date) -> "SelectionState":
        return cls(SelectionPhase.COMPLETE, start, end)

    @property
    def is_complete(self) -> bool:
        return self.phase is SelectionPhase.COMPLETE


def tap_day(state: SelectionState, tapped: date) -> SelectionState:
    """Apply one day tap.

    - empty: the tap becomes the start.
    - start only: a later day completes the range; the same or an earlier
      day restarts from the tapped day.
    - complete: any tap starts a new selection.
    """
    if state.phase is SelectionPhase.START_ONLY and state.start is not None and tapped > state.start:
        return SelectionState.complete(state.start, tapped)
    return SelectionState.start_only(tapped)


def reset() -> SelectionState:
    return SelectionState.empty()


def is_in_selected_range(state: SelectionState, day: date) -> bool:
    """Interior days of a complete selection; the endpoints are excluded."""
    if not state.is_complete:
        return False
    return state.start < day < state.end  # type: ignore[operator]


def is_selection_endpoint(state: SelectionState, day: date) -> bool:
    return day == state.start or day == state.end


def nights(state: SelectionState) -> int:
    if not state.is_complete:
        return 0
    return (state.end - state.start).days  # type: ignore[operator]
