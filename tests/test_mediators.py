import pytest

from railsim.event import Event, EventOccurrence
from railsim.mediators import CollisionMediator, EventMediator, TrainsTimeMediator
from railsim.node import Node, NodeSimulation
from railsim.rail import Rail, RailSimulation
from railsim.train import Train


class _FakeTrain:
    def __init__(self, position, dest="B", stopping=0.0, max_acceleration=1.0):
        self.position = position
        self.next_node_destiny = dest
        self._stopping = stopping
        self.max_acceleration = max_acceleration
        self.notified = []

    def stopping_distance(self):
        return self._stopping

    def notify(self, subject):
        self.notified.append(subject)


class _FakeSimulation:
    def __init__(self, rails=(), nodes=(), current_time=0):
        self.rails = list(rails)
        self.nodes = list(nodes)
        self.current_time = current_time


def _rail(*trains):
    rail = RailSimulation(Rail("A", "B", 1000.0))
    for train in trains:
        rail.add_train(train)
    return rail


def test_can_join_empty_rail():
    mediator = CollisionMediator(_FakeSimulation())
    assert mediator.can_join_rail(_rail(), "B", False) is True


def test_opposite_direction_blocked_on_one_way_rail():
    mediator = CollisionMediator(_FakeSimulation())
    rail = _rail(_FakeTrain(500, dest="A"))
    assert mediator.can_join_rail(rail, "B", False) is False
    assert mediator.can_join_rail(rail, "B", True) is True


@pytest.mark.parametrize("position, allowed", [(0, False), (49, False), (50, True), (300, True)])
def test_same_direction_needs_start_distance(position, allowed):
    mediator = CollisionMediator(_FakeSimulation())
    rail = _rail(_FakeTrain(position, dest="B"))
    assert mediator.can_join_rail(rail, "B", False) is allowed


def test_behind_train_matches_acceleration_when_far():
    ahead = _FakeTrain(500, max_acceleration=2.5)
    behind = _FakeTrain(200, stopping=0.0, max_acceleration=1.0)
    rail = _rail(ahead, behind)
    CollisionMediator(_FakeSimulation(rails=[rail])).check_for_collisions()
    assert behind.max_acceleration == ahead.max_acceleration
    assert ahead.notified == [] and behind.notified == []


def test_close_trains_notify_every_observer():
    ahead = _FakeTrain(105, max_acceleration=2.5)
    behind = _FakeTrain(100, max_acceleration=1.0)
    rail = _rail(ahead, behind)
    CollisionMediator(_FakeSimulation(rails=[rail])).check_for_collisions()
    assert ahead.notified == [rail]
    assert behind.notified == [rail]
    assert behind.max_acceleration == 1.0


def test_event_mediator_finishes_elapsed_events():
    node = NodeSimulation(Node("A", position=(0.0, 0.0)))
    occurrence = EventOccurrence(Event("delay", 1.0, 30, "A"), 10)
    node.occurrences.append(occurrence)
    simulation = _FakeSimulation(nodes=[node], current_time=occurrence.finish_time - 1)
    mediator = EventMediator(simulation)
    mediator.update_events()
    assert occurrence.finished is False
    simulation.current_time = occurrence.finish_time
    mediator.update_events()
    assert occurrence.finished is True


class _FakeTrainSim:
    def __init__(self, train, total_time):
        self.train = train
        self.total_time = total_time


class _FakeManager:
    def __init__(self, count):
        self.simulations = [object()] * count


def test_trains_time_mediator_truncates_average():
    train = Train("T1", 1.0, 1.0, "A", "B", 0)
    mediator = TrainsTimeMediator(_FakeManager(2))
    mediator.add_observer(_FakeTrainSim(train, 10))
    mediator.add_observer(_FakeTrainSim(train, 11))
    mediator.setup_averages()
    assert mediator.train_average_time(train) == 10


def test_trains_time_mediator_single_simulation_keeps_time():
    first = Train("T1", 1.0, 1.0, "A", "B", 0)
    second = Train("T2", 1.0, 1.0, "A", "B", 0)
    mediator = TrainsTimeMediator(_FakeManager(1))
    mediator.add_observer(_FakeTrainSim(first, 42))
    mediator.add_observer(_FakeTrainSim(second, 7))
    mediator.setup_averages()
    assert mediator.train_average_time(first) == 42
    assert mediator.train_average_time(second) == 7


def test_unknown_train_average_raises():
    mediator = TrainsTimeMediator(_FakeManager(1))
    mediator.setup_averages()
    with pytest.raises(KeyError):
        mediator.train_average_time(Train("T9", 1.0, 1.0, "A", "B", 0))