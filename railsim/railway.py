"""The railway network: nodes, rails, events, schedules and routing."""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field

from railsim.event import Event
from railsim.node import Node
from railsim.rail import Rail
from railsim.schedule import Schedule

logger = logging.getLogger(__name__)


class RailwayError(RuntimeError):
    """Raised when the railway network is inconsistent or a lookup fails."""


@dataclass
class PathInfo:
    """A route as ``(node name, cumulative distance)`` pairs from the source."""

    path: list[tuple[str, int]] = field(default_factory=list)

    def total_distance(self) -> int:
        """Distance to the last node, or -1 when there is no route."""
        if not self.path:
            return -1
        return self.path[-1][1]


class RailwaySystem:
    """Holds the static description of a railway network."""

    def __init__(self) -> None:
        self.nodes: dict[str, Node] = {}
        self.rails: list[Rail] = []
        self.events: list[Event] = []
        self.schedules: dict[str, Schedule] = {}

    def add_node(self, name: str) -> None:
        if not name:
            logger.error("Node must have a name")
            return
        self.nodes.setdefault(name, Node(name))

    def add_rail(self, node1: str, node2: str, distance: float) -> None:
        if not node1 or not node2:
            logger.error("Rails must have valid node names")
            return
        if node1 == node2:
            return
        self.rails.append(Rail(node1, node2, distance))

    def add_event(self, type_: str, probability: float, duration: float, location: str) -> None:
        self.events.append(Event(type_, probability, duration, location))

    def add_schedule(self, schedule: Schedule) -> None:
        self.schedules.setdefault(schedule.name, schedule)

    def get_node(self, name: str) -> Node:
        try:
            return self.nodes[name]
        except KeyError:
            raise RailwayError(f"Node '{name}' not found") from None

    def get_schedule(self, name: str) -> Schedule:
        try:
            return self.schedules[name]
        except KeyError:
            raise RailwayError(f"Schedule not found: {name}") from None

    def setup(self) -> None:
        """Link rails into the graph and attach events to their nodes."""
        for rail in self.rails:
            first = self.nodes.get(rail.node1)
            second = self.nodes.get(rail.node2)
            if first is None or second is None:
                raise RailwayError(
                    f"Rail has node which doesn't exist: {rail.node1} - {rail.node2}"
                )
            weight = int(rail.distance)
            first.set_neighbor(second.name, weight)
            second.set_neighbor(first.name, weight)
        for event in self.events:
            node = self.get_node(event.location)
            node.add_event(event)
            event.node = node

    def shortest_path(self, source: str, target: str) -> PathInfo:
        """Dijkstra's shortest route between two nodes."""
        self.get_node(source)
        self.get_node(target)
        dist: dict[str, int] = {source: 0}
        previous: dict[str, str] = {}
        visited: set[str] = set()
        queue: list[tuple[int, str]] = [(0, source)]
        while queue:
            d, name = heapq.heappop(queue)
            if name in visited:
                continue
            visited.add(name)
            if name == target:
                break
            for neighbor, weight in self.nodes[name].neighbors.items():
                candidate = d + weight
                if neighbor not in dist or candidate < dist[neighbor]:
                    dist[neighbor] = candidate
                    previous[neighbor] = name
                    heapq.heappush(queue, (candidate, neighbor))
        if target not in visited:
            return PathInfo()
        route = [target]
        while route[-1] != source:
            route.append(previous[route[-1]])
        route.reverse()
        return PathInfo([(name, dist[name]) for name in route])