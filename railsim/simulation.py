"""One run of a schedule over a railway network, second by second."""

from __future__ import annotations

import random
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from railsim.event import EventSimulationState, format_time_hhmmss
from railsim.mediators import CollisionMediator, EventMediator
from railsim.node import NodeSimulation
from railsim.rail import RailSimulation
from railsim.railway import RailwayError, RailwaySystem
from railsim.schedule import Schedule
from railsim.train import TrainSimulation, TrainSimulationState

DEFAULT_MAX_TRAIN_SPEED = 50.0


class SimulationState(Enum):
    STARTING = "starting"
    RUNNING = "running"
    FINISHED = "finished"


def _timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d_%H-%M-%S")


class Simulation:
    """Runs all trains of a schedule and records a snapshot every second."""

    def __init__(
        self,
        railway_system: RailwaySystem,
        schedule: Schedule,
        sim_id: int,
        *,
        rail_two_way: bool = False,
        max_train_speed: float = DEFAULT_MAX_TRAIN_SPEED,
        output_directory: Union[str, Path] = ".",
        rng: Optional[random.Random] = None,
    ) -> None:
        self.railway_system = railway_system
        self.schedule = schedule
        self.id = sim_id
        self.rail_two_way = rail_two_way
        self.max_train_speed = max_train_speed
        self.directory = Path(output_directory) / f"{schedule.name}_{sim_id}_{_timestamp()}"
        self.event_mediator = EventMediator(self)
        self.collision_mediator = CollisionMediator(self)
        self.state = SimulationState.STARTING
        self.start_time = 0
        self.total_time = 0
        self._trains_states: list[list[TrainSimulationState]] = []
        self._events_states: list[list[EventSimulationState]] = []

        self.nodes = [
            NodeSimulation(node, self.event_mediator, rng)
            for node in railway_system.nodes.values()
        ]
        self.rails = [RailSimulation(rail, self.collision_mediator) for rail in railway_system.rails]
        self.trains = [TrainSimulation(self, train) for train in schedule.trains]
        if not self.trains:
            raise RailwayError(f"Schedule '{schedule.name}' has no trains")
        self.start_time = min(int(t.train.hour) for t in self.trains)
        self.state = SimulationState.RUNNING

    @property
    def current_time(self) -> int:
        return self.start_time + self.total_time

    def get_node(self, name: str) -> NodeSimulation:
        for node in self.nodes:
            if node.node.name == name:
                return node
        raise RailwayError("Node name not found")

    def get_rail(self, node1: str, node2: str) -> Optional[RailSimulation]:
        """The rail joining the two nodes, or None."""
        return next((rail for rail in self.rails if rail.has_nodes(node1, node2)), None)

    def update(self) -> None:
        """Advance every train by one second, then handle collisions and events."""
        if self.state is not SimulationState.RUNNING:
            return
        self.total_time += 1
        for train in self.trains:
            train.update()
        self._record_state()
        self.collision_mediator.check_for_collisions()
        self.event_mediator.update_events()
        if all(train.has_finished() for train in self.trains):
            self._record_state()
            self.state = SimulationState.FINISHED

    def is_finished(self) -> bool:
        return self.state is SimulationState.FINISHED

    def trains_state(self, index: int) -> list[TrainSimulationState]:
        return self._trains_states[index]

    def events_state(self, index: int) -> list[EventSimulationState]:
        return self._events_states[index]

    def write_logs(self) -> None:
        """Write one log file per train into the simulation's directory."""
        self.directory.mkdir(parents=True, exist_ok=True)
        for train_sim in self.trains:
            train = train_sim.train
            lines = [
                f"Train : {train.name}",
                f"Estimated optimal travel time : {format_time_hhmmss(train_sim.optimal_time)}",
                f"Travel from {train.departure} to {train.arrival} at {format_time_hhmmss(train.hour)}",
                "",
                train_sim.logs,
            ]
            with open(self.directory / f"{train.name}.log", "a", encoding="utf-8") as handle:
                handle.write("\n".join(lines) + "\n")

    def _record_state(self) -> None:
        self._trains_states.append([train.current_state() for train in self.trains])
        self._events_states.append(
            [occ.current_state() for node in self.nodes for occ in node.occurrences]
        )