"""Observer pattern implementation for validation events.

Provides event types, observer protocol, and mixin for adding observer
support to validation classes.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "ValidationEventType",
    "ValidationEvent",
    "ValidationObserver",
    "ObservableMixin",
    "notify_all",
]


class ValidationEventType(Enum):
    """Types of validation events that can be observed."""

    VALIDATION_STARTED = auto()
    """Emitted when a compiled validator begins validating an instance."""

    ERROR_ADDED = auto()
    """Emitted once for every error a validation run produces."""

    VALIDATION_COMPLETED = auto()
    """Emitted when a compiled validator has finished with an instance."""


@dataclass(frozen=True)
class ValidationEvent:
    """A validation event that can be observed.

    Attributes:
        event_type: The type of event that occurred.
        source: The validator that emitted the event.
        data: Event-specific data dictionary.

    Example:
        event = ValidationEvent(
            event_type=ValidationEventType.ERROR_ADDED,
            source=validator,
            data={"field": "email", "message": "must be a valid email address"},
        )
    """

    event_type: ValidationEventType
    source: object
    data: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class ValidationObserver(Protocol):
    """Protocol for validation event observers.

    Implement this protocol to receive validation events. Observers
    can be used for logging, metrics collection, alerting, etc.

    Example:
        class PrintingObserver:
            def on_event(self, event: ValidationEvent) -> None:
                print(f"{event.event_type.name}: {event.data}")
    """

    def on_event(self, event: ValidationEvent) -> None:
        """Handle a validation event.

        Args:
            event: The validation event to handle.
        """
        ...


def notify_all(observers: Iterable[ValidationObserver], event: ValidationEvent) -> None:
    """Deliver ``event`` to every observer, in order.

    Exceptions raised by an observer propagate to the caller.
    """
    for observer in observers:
        observer.on_event(event)


class ObservableMixin:
    """Mixin class to collect observers of validation events.

    Subclasses call ``super().__init__()`` and override
    ``_check_observers_mutable`` to refuse changes, for example once a
    builder has been consumed.

    Example:
        builder = ValidatorBuilder[User]()
        builder.add_observer(PrintingObserver())
    """

    def __init__(self) -> None:
        self._observers: list[ValidationObserver] = []

    def _check_observers_mutable(self) -> None:
        """Hook run before every change to the observer list."""

    def add_observer(self, observer: ValidationObserver) -> None:
        """Add an observer to receive validation events.

        Adding the same observer twice has no effect.

        Args:
            observer: An object implementing the ValidationObserver protocol.
        """
        self._check_observers_mutable()
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: ValidationObserver) -> None:
        """Remove an observer from receiving validation events.

        Args:
            observer: The observer to remove.
        """
        self._check_observers_mutable()
        if observer in self._observers:
            self._observers.remove(observer)

    @property
    def observers(self) -> list[ValidationObserver]:
        """Get a copy of the current observers list."""
        return self._observers.copy()

    def clear_observers(self) -> None:
        """Remove all observers."""
        self._check_observers_mutable()
        self._observers.clear()
