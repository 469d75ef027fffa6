"""Observer pattern primitives used by simulated railway elements."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Observer(ABC):
    """Something that wants to hear from a subject."""

    @abstractmethod
    def notify(self, subject: "Subject") -> None:
        """React to a notification sent by ``subject``."""


class Subject:
    """Keeps a list of observers and notifies them on demand."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    @property
    def observers(self) -> list[Observer]:
        """The observers currently attached, in the order they were added."""
        return self._observers

    def add_observer(self, observer: Observer) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        """Remove every occurrence of ``observer``."""
        self._observers = [o for o in self._observers if o is not observer]

    def notify_observers(self) -> None:
        for observer in list(self._observers):
            observer.notify(self)