"""Rails connecting two nodes, and their per-simulation counterparts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from railsim.observer import Subject


@dataclass(frozen=True, eq=False)
class Rail:
    """A track between two named nodes, ``distance`` metres long."""

    node1: str
    node2: str
    distance: float


class RailSimulation(Subject):
    """A rail inside one running simulation; trains on it observe it."""

    def __init__(self, rail: Rail, mediator: Any = None) -> None:
        super().__init__()
        self.rail = rail
        self.mediator = mediator

    def add_train(self, train: Any) -> None:
        self.add_observer(train)

    def remove_train(self, train: Any) -> None:
        self.remove_observer(train)

    def has_nodes(self, node1: str, node2: str) -> bool:
        """True if this rail joins the two nodes, in either order."""
        a, b = self.rail.node1, self.rail.node2
        return (a == node1 and b == node2) or (a == node2 and b == node1)