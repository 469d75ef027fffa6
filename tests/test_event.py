import pytest

from railsim.event import (
    Event,
    EventOccurrence,
    EventSimulationState,
    format_time,
    format_time_hhmmss,
)


def _parse(text):
    return [int(part) for part in text.split(":")]


@pytest.mark.parametrize("seconds", [0, 59, 60, 3599, 3600, 3661, 86399, 90061])
def test_hhmmss_round_trip(seconds):
    hours, minutes, secs = _parse(format_time_hhmmss(seconds))
    assert 0 <= minutes < 60 and 0 <= secs < 60
    assert hours * 3600 + minutes * 60 + secs == seconds


@pytest.mark.parametrize("seconds", [0, 60, 3600, 3659, 7320])
def test_hhmm_drops_seconds(seconds):
    hours, minutes = _parse(format_time(seconds))
    assert hours * 3600 + minutes * 60 == seconds - seconds % 60


def test_hhmmss_pinned_value():
    assert format_time_hhmmss(3661) == "01:01:01"


def test_fractional_seconds_truncate():
    assert format_time_hhmmss(59.9) == format_time_hhmmss(59)


def test_finish_time_truncates():
    event = Event("Delay", 0.5, 5.7, "Lisbon")
    occ = EventOccurrence(event, 10)
    assert occ.finish_time == 15


def test_mark_finished_changes_state():
    occ = EventOccurrence(Event("Delay", 0.5, 30, "Porto"), 0)
    assert occ.finished is False
    before = occ.current_state()
    occ.mark_finished()
    after = occ.current_state()
    assert before.finished is False
    assert after.finished is True


def test_state_exposes_event_data():
    event = Event("Strike", 0.1, 120, "Braga")
    occ = EventOccurrence(event, 3600)
    state = occ.current_state()
    assert state.type == "Strike"
    assert state.location_name == "Braga"
    assert state.duration == 120
    assert state.duration_string == format_time_hhmmss(120)
    assert state.start_string == format_time_hhmmss(3600)
    assert state.occurrence is occ


def test_states_equal_by_occurrence_identity():
    event = Event("Strike", 0.1, 120, "Braga")
    a = EventOccurrence(event, 0)
    b = EventOccurrence(event, 0)
    assert EventSimulationState(a, False) == EventSimulationState(a, False)
    assert not (EventSimulationState(a, False) == EventSimulationState(b, False))


def test_event_node_defaults_empty():
    event = Event("Delay", 0.2, 10, "Faro")
    assert event.node is None