# railsim

`railsim` simulates trains on a railway network. The simulation advances one second at a time.

A network has named nodes, which are stations. Rails join pairs of nodes, and each rail has a length in metres. A node can carry events, such as a signal failure. Each event has a probability and a duration. When a train arrives at a node, every event of that node is rolled against its probability. An event that occurs blocks the node until its duration has passed.

Each train waits for its departure hour. It then takes the shortest path to its arrival node. On a rail it accelerates and brakes within its own limits and within the speed limit of the simulation. It keeps its distance from the trains ahead on the same rail.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `railsim.railway`
  - `RailwaySystem` holds the static network: `nodes`, `rails`, `events` and `schedules`. You build it with `add_node`, `add_rail`, `add_event` and `add_schedule`.
  - `setup()` links the rails into the node graph and attaches each event to its node. Call it once, after everything has been added.
  - `shortest_path(source, target)` runs Dijkstra's algorithm. It returns a `PathInfo` made of `(node name, cumulative distance)` pairs.
  - `PathInfo.total_distance()` is `-1` when the target cannot be reached.
  - `RailwayError` is raised for an unknown node or schedule, for a rail to a node that does not exist, and for an event at an unknown location.
- `railsim.train`
  - `Train` describes one scheduled train. Its fields are `name`, `max_acceleration`, `max_brake_force`, `departure`, `arrival` and `hour`, where `hour` is in seconds since midnight.
  - `TrainSimulation` moves a train through one simulation. `TrainSimulationState` is a snapshot of it at one second. `TrainStatus` is what the train is doing in that second.
- `railsim.schedule`
  - `Schedule` is a named list of trains.
  - `describe()` returns a readable listing of the schedule.
- `railsim.node` and `railsim.rail`
  - `Node` and `Rail` are the static network elements.
  - `NodeSimulation` and `RailSimulation` are their counterparts inside one simulation. The trains that are currently on them observe them.
- `railsim.event`
  - `Event`, `EventOccurrence` and `EventSimulationState` describe events.
  - `format_time` formats seconds as `HH:MM`. `format_time_hhmmss` formats seconds as `HH:MM:SS`.
- `railsim.simulation`
  - `Simulation` runs one schedule on the network. Each call to `update()` advances it by one second.
  - It records a snapshot of all trains for each second, available through `trains_state(index)`. It records the event occurrences the same way, through `events_state(index)`.
  - Keyword options:
    - `rail_two_way` (default `False`) lets trains share a rail in opposite directions.
    - `max_train_speed` is in m/s, with a default of `50.0`.
    - `output_directory` (default `"."`) is where the logs go.
    - `rng` is a `random.Random` that drives the event rolls.
- `railsim.manager`
  - `SimulationsManager` runs several independent simulations of the same schedule and steps them together. Extra keyword arguments are passed to every `Simulation`.
  - Once all runs have finished, `total_average_time` holds the average run length. `train_average_time(train)` gives the average running time of one train.
- `railsim.mediators`
  - `CollisionMediator` governs who may join a rail and warns trains that get too close.
  - `EventMediator` ends event occurrences once their time has passed.
  - `TrainsTimeMediator` computes the per-train averages.

## Example

```python
from railsim.railway import RailwaySystem
from railsim.schedule import Schedule
from railsim.train import Train
from railsim.manager import SimulationsManager

railway = RailwaySystem()
for name in ("CityA", "CityB", "CityC"):
    railway.add_node(name)
railway.add_rail("CityA", "CityB", 15000)
railway.add_rail("CityB", "CityC", 8000)
railway.add_event("SignalFailure", 0.1, 300, "CityB")

schedule = Schedule("morning")
schedule.add_train(Train("T1", 0.7, 1.2, "CityA", "CityC", 8 * 3600))
railway.add_schedule(schedule)
railway.setup()

manager = SimulationsManager(railway, schedule, 5, max_train_speed=40.0)
while not manager.are_simulations_finished():
    manager.update_simulations()

print(schedule.describe())
print(manager.train_average_time(schedule.trains[0]))
manager.log_simulations()
```

`log_simulations()` writes one `<train name>.log` file for every train of every run. Each run writes into its own directory, `<schedule>_<id>_<timestamp>`, under the output directory. A log file holds the estimated optimal travel time, followed by one line for each simulated second of the journey. `log_simulation(index)` writes the logs of a single run.

## What it does not do

`railsim` is a library only:

- It has no command-line program.
- It has no graphical view of the network or of a running simulation.
- It does not read networks or schedules from files. You build them in code with the `add_*` methods.
- It writes nothing to disk except the train log files described above.