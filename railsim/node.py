"""Stations of the network and their per-simulation counterparts."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from railsim.event import Event, EventOccurrence
from railsim.observer import Subject

if TYPE_CHECKING:
    from railsim.rail import RailSimulation  # noqa: F401

_default_rng = random.Random()


def _random_position() -> tuple[float, float]:
    return (float(random.randrange(600)), float(random.randrange(600)))


@dataclass(eq=False)
class Node:
    """A station: a named point with neighbours and possible events."""

    name: str
    position: tuple[float, float] = field(default_factory=_random_position)
    neighbors: dict[str, int] = field(default_factory=dict)
    events: list[Event] = field(default_factory=list)

    @property
    def key(self) -> str:
        return self.name

    def set_neighbor(self, name: str, weight: int) -> None:
        self.neighbors[name] = int(weight)

    def add_event(self, event: Event) -> None:
        self.events.append(event)


class NodeSimulation(Subject):
    """A node inside one running simulation; trains waiting there observe it."""

    def __init__(self, node: Node, mediator: Any = None, rng: Optional[random.Random] = None) -> None:
        super().__init__()
        self.node = node
        self.mediator = mediator
        self.occurrences: list[EventOccurrence] = []
        self._rng = rng if rng is not None else _default_rng

    def add_train(self, train: Any) -> None:
        """Attach a train and roll each of the node's events against it."""
        self.add_observer(train)
        for event in self.node.events:
            if self._rng.random() < event.probability:
                self.occurrences.append(EventOccurrence(event, train.current_time))

    def remove_train(self, train: Any) -> None:
        self.remove_observer(train)

    def is_blocked(self) -> bool:
        """True while any event occurrence here is still in progress."""
        return any(not occ.finished for occ in self.occurrences)