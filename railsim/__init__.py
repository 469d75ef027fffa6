"""Discrete-time railway network simulation: networks, schedules, trains and events."""

__version__ = "0.1.0"