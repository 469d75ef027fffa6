"""Named collections of trains to be simulated together."""

from __future__ import annotations

from typing import Any

from railsim.event import format_time


class Schedule:
    """A named list of trains."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.trains: list[Any] = []

    def add_train(self, train: Any) -> None:
        self.trains.append(train)

    def describe(self) -> str:
        """A human-readable listing of the schedule and its trains."""
        lines = [f"Schedule: {self.name}"]
        for train in self.trains:
            lines.append(
                f"  Train: {train.name}, MaxAcceleration: {train.max_acceleration:g}, "
                f"MaxBrakeForce: {train.max_brake_force:g}, Departure: {train.departure}, "
                f"Arrival: {train.arrival}, Hour: {format_time(train.hour)}"
            )
        return "\n".join(lines) + "\n"