"""Events that may occur at railway nodes, and time formatting helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from railsim.node import Node


def _split_seconds(seconds: float) -> tuple[int, int, int]:
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return hours, minutes, secs


def format_time(seconds: float) -> str:
    """Format a number of seconds as ``HH:MM``."""
    hours, minutes, _ = _split_seconds(seconds)
    return f"{hours:02d}:{minutes:02d}"


def format_time_hhmmss(seconds: float) -> str:
    """Format a number of seconds as ``HH:MM:SS``."""
    hours, minutes, secs = _split_seconds(seconds)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


@dataclass(eq=False)
class Event:
    """A possible incident at a location, with its probability and duration."""

    type: str
    probability: float
    duration: float
    location: str
    node: Optional["Node"] = field(default=None, repr=False)


@dataclass(eq=False)
class EventOccurrence:
    """One actual happening of an event, starting at a given second."""

    event: Event
    start: int
    finished: bool = False

    @property
    def finish_time(self) -> int:
        return int(self.start + self.event.duration)

    def mark_finished(self) -> None:
        self.finished = True

    def current_state(self) -> "EventSimulationState":
        return EventSimulationState(self, self.finished)


@dataclass(frozen=True)
class EventSimulationState:
    """A snapshot of an event occurrence at one moment of a simulation."""

    occurrence: EventOccurrence
    finished: bool

    @property
    def type(self) -> str:
        return self.occurrence.event.type

    @property
    def location_name(self) -> str:
        return self.occurrence.event.location

    @property
    def duration(self) -> float:
        return self.occurrence.event.duration

    @property
    def duration_string(self) -> str:
        return format_time_hhmmss(self.occurrence.event.duration)

    @property
    def start_string(self) -> str:
        return format_time_hhmmss(self.occurrence.start)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, EventSimulationState):
            return NotImplemented
        return self.occurrence is other.occurrence and self.finished == other.finished

    def __hash__(self) -> int:
        return hash((id(self.occurrence), self.finished))