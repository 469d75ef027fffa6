from dataclasses import dataclass

from railsim.event import format_time
from railsim.schedule import Schedule


@dataclass
class StubTrain:
    name: str
    max_acceleration: float
    max_brake_force: float
    departure: str
    arrival: str
    hour: int


def test_add_train_preserves_order():
    schedule = Schedule("Morning")
    t1 = StubTrain("T1", 1.0, 2.0, "A", "B", 0)
    t2 = StubTrain("T2", 1.0, 2.0, "B", "A", 60)
    schedule.add_train(t1)
    schedule.add_train(t2)
    assert schedule.trains == [t1, t2]
    assert schedule.name == "Morning"


def test_describe_empty_schedule():
    assert Schedule("Night").describe() == "Schedule: Night\n"


def test_describe_lists_each_train():
    schedule = Schedule("Morning")
    schedule.add_train(StubTrain("Express", 1.5, 2.0, "Lisbon", "Porto", 3600))
    lines = schedule.describe().splitlines()
    assert lines[0] == "Schedule: Morning"
    assert len(lines) == 2
    assert lines[1] == (
        "  Train: Express, MaxAcceleration: 1.5, MaxBrakeForce: 2, "
        "Departure: Lisbon, Arrival: Porto, Hour: " + format_time(3600)
    )