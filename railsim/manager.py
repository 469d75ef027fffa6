"""Running several simulations of one schedule and collecting results."""

from __future__ import annotations

from typing import Any

from railsim.mediators import TrainsTimeMediator
from railsim.railway import RailwayError, RailwaySystem
from railsim.schedule import Schedule
from railsim.simulation import Simulation, SimulationState


class SimulationsManager:
    """Owns a batch of simulations of the same schedule and steps them together.

    Extra keyword arguments are passed to every :class:`Simulation`.
    """

    def __init__(
        self,
        railway_system: RailwaySystem,
        schedule: Schedule,
        num_simulations: int,
        **simulation_options: Any,
    ) -> None:
        if num_simulations <= 0:
            raise ValueError("Should execute at least 1 or more simulations")
        self.schedule = schedule
        self.state = SimulationState.STARTING
        self.time_mediator = TrainsTimeMediator(self)
        self.travel_times: list[float] = []
        self.event_list: list[str] = []
        self.total_time = 0
        self.total_average_time = 0
        try:
            self.simulations = [
                Simulation(railway_system, schedule, i, **simulation_options)
                for i in range(num_simulations)
            ]
        except Exception as exc:
            raise RailwayError(f"Couldn't initialize Simulation. {exc}") from exc
        self.start_time = self.simulations[0].start_time
        self.state = SimulationState.RUNNING

    @property
    def current_time(self) -> int:
        return self.start_time + self.total_time

    def get_simulation(self, index: int) -> Simulation:
        return self.simulations[index]

    def update_simulations(self) -> None:
        """Advance every unfinished simulation by one second."""
        if self.state is not SimulationState.RUNNING:
            return
        for simulation in self.simulations:
            if not simulation.is_finished():
                simulation.update()
        if self.are_simulations_finished():
            self._collect_results()
            self.state = SimulationState.FINISHED
        self.total_time += 1

    def are_simulations_finished(self) -> bool:
        return all(simulation.is_finished() for simulation in self.simulations)

    def train_average_time(self, train: Any) -> int:
        return self.time_mediator.train_average_time(train)

    def average_travel_time(self) -> float:
        if not self.travel_times:
            return 0.0
        return sum(self.travel_times) / len(self.travel_times)

    def log_simulation(self, index: int) -> None:
        self.simulations[index].write_logs()

    def log_simulations(self) -> None:
        for simulation in self.simulations:
            simulation.write_logs()

    def _collect_results(self) -> None:
        total = 0
        for simulation in self.simulations:
            for train in simulation.trains:
                self.time_mediator.add_observer(train)
            total += simulation.total_time
        self.total_average_time = total // len(self.simulations)
        self.time_mediator.setup_averages()