"""Mediators coordinating trains, rails and events inside simulations."""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from railsim.observer import Subject
from railsim.rail import RailSimulation

MIN_START_DISTANCE = 50
"""Metres a train already on a rail must have covered before another may join."""

SAFE_DISTANCE = 100
"""Extra metres kept between trains before the one behind may match the one ahead."""

COLLISION_DISTANCE = 10
"""Gap in metres at which every train on the rail is warned."""


class CollisionMediator:
    """Keeps trains that share a rail from running into each other."""

    def __init__(self, simulation: Any) -> None:
        self.simulation = simulation

    def check_for_collisions(self) -> None:
        """Compare every pair of trains on each rail and react to close gaps."""
        for rail in self.simulation.rails:
            trains = list(rail.observers)
            for ahead in trains:
                for behind in trains:
                    if ahead is behind or ahead.position <= behind.position:
                        continue
                    gap = ahead.position - behind.position
                    if behind.stopping_distance() <= gap - SAFE_DISTANCE:
                        behind.max_acceleration = ahead.max_acceleration
                    if gap <= COLLISION_DISTANCE:
                        rail.notify_observers()

    def can_join_rail(self, rail: RailSimulation, dest: str, two_way: bool) -> bool:
        """True if a train heading to ``dest`` may enter ``rail`` now."""
        for train in rail.observers:
            same_way = dest == train.next_node_destiny
            if not two_way and not same_way:
                return False
            if same_way and train.position < MIN_START_DISTANCE:
                return False
        return True


class EventMediator:
    """Marks event occurrences as finished once their time has passed."""

    def __init__(self, simulation: Any) -> None:
        self.simulation = simulation

    def update_events(self) -> None:
        now = self.simulation.current_time
        for node in self.simulation.nodes:
            for occurrence in node.occurrences:
                if not occurrence.finished and now >= occurrence.finish_time:
                    occurrence.mark_finished()


class TrainsTimeMediator(Subject):
    """Averages each train's running time over all simulations of a manager."""

    def __init__(self, manager: Any) -> None:
        super().__init__()
        self.manager = manager
        self._averages: dict[Any, int] = {}

    def setup_averages(self) -> None:
        """Sum the running time of every observed train and divide per simulation."""
        totals: dict[Any, int] = defaultdict(int, self._averages)
        for train_simulation in self.observers:
            totals[train_simulation.train] += int(train_simulation.total_time)
        count = len(self.manager.simulations)
        self._averages = {train: total // count for train, total in totals.items()}

    def train_average_time(self, train: Any) -> int:
        """The average running time of ``train``; KeyError if it was never seen."""
        return self._averages[train]