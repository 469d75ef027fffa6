"""Trains, their simulated counterparts and snapshots of their state."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from railsim.event import format_time
from railsim.observer import Observer, Subject
from railsim.rail import RailSimulation
from railsim.railway import PathInfo, RailwayError

if TYPE_CHECKING:
    from railsim.node import NodeSimulation

_RAIL_LEN = 7


@dataclass(eq=False)
class Train:
    """A scheduled train: its limits, its route ends and its departure second."""

    name: str
    max_acceleration: float
    max_brake_force: float
    departure: str
    arrival: str
    hour: int


class TrainStatus(Enum):
    """What a simulated train is doing during the current second."""

    STOPPED = "Stoped"
    ACCELERATING = "Speed Up"
    BRAKING = "Braking"
    MAINTAINING = "Mantaining"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class TrainSimulationState:
    """A snapshot of a simulated train at one moment of a simulation."""

    train_simulation: "TrainSimulation"
    current_rail: Optional[RailSimulation]
    current_node: Optional["NodeSimulation"]
    next_node_name: str
    prev_node_name: str
    position: float
    speed: float
    acceleration: float
    safe_distance: bool
    event_warning_stop: bool
    total_distance: float

    def __post_init__(self) -> None:
        if self.train_simulation is None:
            raise ValueError("Train Simulation must not be null")

    def has_arrived_to_node(self) -> bool:
        return self.current_rail is None

    def current_position_name(self) -> str:
        if not self.has_arrived_to_node():
            return f"{self.prev_node_name} - {self.next_node_name}"
        return self.prev_node_name

    @property
    def name(self) -> str:
        return self.train_simulation.train.name

    @property
    def departure(self) -> str:
        return self.train_simulation.train.departure

    @property
    def arrival(self) -> str:
        return self.train_simulation.train.arrival

    @property
    def hour(self) -> str:
        return format_time(self.train_simulation.train.hour)


class TrainSimulation(Observer):
    """A train moving through one simulation, one second per update.

    The simulation object must offer ``get_node(name)``, ``get_rail(a, b)``,
    ``current_time``, ``max_train_speed``, ``rail_two_way``,
    ``railway_system`` and ``collision_mediator``.
    """

    def __init__(self, simulation: Any, train: Train) -> None:
        self.simulation = simulation
        self.train = train
        self.node_source = simulation.get_node(train.departure)
        self.node_destiny = simulation.get_node(train.arrival)
        self.path_info = PathInfo()
        self._logs: list[str] = []
        self.current_rail: Optional[RailSimulation] = None
        self.current_node: Optional["NodeSimulation"] = self.node_source
        self.next_node_name = ""
        self.prev_node_name = train.departure
        self.position = 0.0
        self.speed = 0.0
        self.acceleration = 0.0
        self.status = TrainStatus.STOPPED
        self.event_warning_stop = False
        self.train_can_start = True
        self.has_safe_distance = True
        self.time_running = 0
        self.max_acceleration = train.max_acceleration

        self._calculate_fastest_route()
        self.total_distance = self.path_info.total_distance()
        self.optimal_time = 0.0
        if self.total_distance != -1:
            last_dist = 0
            for _, dist in self.path_info.path:
                self.optimal_time += self._optimal_time_for_distance(dist - last_dist)
                last_dist = dist

    # --- public behaviour -------------------------------------------------

    def update(self) -> None:
        """Advance the train by one second."""
        if self.has_finished():
            return
        if not self._has_arrived_to_node():
            if self._should_stop() and not self._has_stopped():
                self._brake()
            else:
                self._accelerate()
            self._update_position()
            self._log()
        else:
            if self.train_can_start:
                if self._can_start():
                    self._start_route()
            else:
                self.manage_arrival_to_node()
                self._calculate_fastest_route()
            self._log()
        self._update_status()
        self.time_running += 1

    def notify(self, subject: Subject) -> None:
        """A rail warns its trains of a collision risk."""
        if isinstance(subject, RailSimulation):
            self.has_safe_distance = False

    def manage_arrival_to_node(self) -> None:
        """Leave the current rail and wait at the node it leads to."""
        if self.current_rail is None and self.current_node is not None:
            return
        node = self.simulation.get_node(self.next_node_name)
        self._subscribe_to_node(node)
        self.prev_node_name = self.next_node_name
        self.next_node_name = ""
        self.position = 0.0
        self.train_can_start = True

    def rail_string_rep(self) -> str:
        """A small picture of the current rail with this train and its neighbours."""
        if self.current_rail is None:
            return ""
        symbols = [" "] * _RAIL_LEN
        for observer in self.current_rail.observers:
            if observer is self:
                continue
            pos = int(observer.position_percentage() * (_RAIL_LEN - 1))
            if pos >= _RAIL_LEN:
                raise RailwayError("position cannot be larger than Rail lenght")
            symbols[pos] = "O"
        train_pos = int(self.position_percentage() * (_RAIL_LEN - 1))
        if train_pos >= _RAIL_LEN:
            raise RailwayError("position cannot be larger than Rail lenght")
        symbols[train_pos] = "x"
        middle = _RAIL_LEN // 2
        if symbols[middle] == " ":
            symbols[middle] = "..."
        return "".join(f"[{s}]" for s in symbols)

    def stopping_distance(self) -> float:
        """Distance needed to stop from the current speed at full braking."""
        return (self.speed * self.speed) / (2 * self.train.max_brake_force)

    def position_percentage(self) -> float:
        if self.current_rail is None:
            return 0.0
        return min(self.position / self.current_rail.rail.distance, 1.0)

    def has_finished(self) -> bool:
        if self.current_node is None:
            return False
        if self.invalid_path():
            return True
        return self.node_destiny.node.name == self.current_node.node.name

    def invalid_path(self) -> bool:
        return self.total_distance == -1

    def current_state(self) -> TrainSimulationState:
        return TrainSimulationState(
            self,
            self.current_rail,
            self.current_node,
            self.next_node_name,
            self.prev_node_name,
            self.position,
            self.speed,
            self.acceleration,
            self.has_safe_distance,
            self.event_warning_stop,
            self.total_distance,
        )

    @property
    def logs(self) -> str:
        return "".join(self._logs)

    @property
    def next_node_destiny(self) -> str:
        return self.next_node_name

    @property
    def current_time(self) -> int:
        return self.simulation.current_time

    @property
    def total_time(self) -> int:
        return self.time_running

    # --- internals --------------------------------------------------------

    def _log(self) -> None:
        if self.has_finished():
            return
        now = format_time(self.simulation.current_time)
        if self._has_arrived_to_node():
            if self.current_node is not None:
                self._logs.append(f"[{now}] - [{self.current_node.node.name}] - [Waiting]\n")
            return
        rail = self.current_rail
        distance_left = max(rail.rail.distance - self.position, 0)
        self._logs.append(
            f"[{now}] - [{self.prev_node_name}][{self.next_node_name}] - "
            f"[{distance_left / 1000:g}km | {self.speed:g}m/s] - [{self.status.label}] - "
            f"{self.rail_string_rep()} ({len(rail.observers)})\n"
        )

    def _accelerate(self) -> None:
        if not self._can_start():
            return
        self.acceleration = self.max_acceleration

    def _brake(self) -> None:
        if self._has_stopped():
            return
        self.acceleration = -self.train.max_brake_force

    def _update_position(self) -> None:
        self.speed = max(0.0, self.speed + self.acceleration)
        max_speed = self.simulation.max_train_speed
        if self.speed >= max_speed:
            self.speed = max_speed
            self.acceleration = 0.0
        self.position += self.speed

    def _update_status(self) -> None:
        if self.acceleration > 0:
            self.status = TrainStatus.ACCELERATING
        elif self._has_stopped():
            self.status = TrainStatus.STOPPED
            self.acceleration = 0.0
        elif self.acceleration < 0:
            self.status = TrainStatus.BRAKING
        else:
            self.status = TrainStatus.MAINTAINING

    def _start_route(self) -> None:
        if self.has_finished():
            return
        if len(self.path_info.path) < 2:
            return
        node_start = self.path_info.path[0][0]
        node_finish = self.path_info.path[1][0]
        rail = self.simulation.get_rail(node_start, node_finish)
        if rail is None:
            raise RailwayError("Rail not founded! Check the Path to make sure nodes are connected")
        if not self.simulation.collision_mediator.can_join_rail(
            rail, node_finish, self.simulation.rail_two_way
        ):
            return
        self._subscribe_to_rail(rail)
        self.next_node_name = node_finish
        self.speed = 0.0
        self.position = 0.0
        self.acceleration = 0.0
        self.train_can_start = False

    def _subscribe_to_node(self, node: "NodeSimulation") -> None:
        self._unsubscribe_current_rail()
        self.current_node = node
        node.add_train(self)

    def _subscribe_to_rail(self, rail: RailSimulation) -> None:
        self._unsubscribe_current_node()
        self.current_rail = rail
        rail.add_train(self)

    def _unsubscribe_current_node(self) -> None:
        if self.current_node is not None:
            self.current_node.remove_train(self)
            self.current_node = None

    def _unsubscribe_current_rail(self) -> None:
        if self.current_rail is not None:
            self.current_rail.remove_train(self)
            self.current_rail = None

    def _should_stop(self) -> bool:
        if self.current_rail is None:
            raise RailwayError("Should be on a rail to call `ShouldStop`")
        if not self._check_safe_distance():
            return True
        distance_left = self.current_rail.rail.distance - self.position
        return distance_left <= self.stopping_distance()

    def _check_safe_distance(self) -> bool:
        if self._has_stopped():
            self.has_safe_distance = True
        return self.has_safe_distance

    def _has_arrived_to_node(self) -> bool:
        if not self._is_time_to_start():
            return True
        if self.current_rail is None and self.current_node is not None:
            return True
        if self.current_rail is not None and self._traveled_all_rail():
            return True
        return False

    def _can_start(self) -> bool:
        if self.current_node is not None and self.current_node.is_blocked():
            return False
        return not (self.event_warning_stop or not self._is_time_to_start() or self.has_finished())

    def _is_time_to_start(self) -> bool:
        return self.simulation.current_time >= self.train.hour

    def _traveled_all_rail(self) -> bool:
        if self.current_rail is None:
            raise RailwayError("Cannot calculate traveled rail due to: missing rail")
        return self.current_rail.rail.distance <= self.position and self._has_stopped()

    def _has_stopped(self) -> bool:
        return self.speed == 0

    def _calculate_fastest_route(self) -> None:
        current = self.current_node.node.name
        destiny = self.node_destiny.node.name
        if destiny != current:
            self.path_info = self.simulation.railway_system.shortest_path(current, destiny)

    def _optimal_time_for_distance(self, distance: float) -> float:
        max_speed = self.simulation.max_train_speed
        acceleration = self.max_acceleration
        deceleration = self.train.max_brake_force
        peak_speed = math.sqrt(2 * distance / ((1 / acceleration) + (1 / deceleration)))
        peak_speed = min(max_speed, peak_speed)
        t_acceleration = peak_speed / acceleration
        t_deceleration = peak_speed / deceleration
        t_constant = 0.0
        if peak_speed == max_speed:
            d_acc = (max_speed * max_speed) / (2 * acceleration)
            d_dec = (max_speed * max_speed) / (2 * deceleration)
            t_constant = (distance - (d_acc + d_dec)) / max_speed
        return t_acceleration + t_constant + t_deceleration