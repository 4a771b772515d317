"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from calendar_events.domain import Event, EventAttributes, EventId, Occurrence


class EventStore(ABC):
    """Interface for event persistence operations.

    Implementations raise PersistenceError when the backend fails.
    """

    @abstractmethod
    def create_event(self, attributes: EventAttributes) -> Event:
        """Persist a new event and return it with its assigned ID."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event with its occurrences, or None if not found."""
        ...

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return every event with its occurrences."""
        ...

    @abstractmethod
    def update_event(self, event_id: EventId, attributes: EventAttributes) -> int:
        """Overwrite the attributes of an event. Return the number of rows updated."""
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> int:
        """Delete an event and its occurrences. Return the number of events deleted."""
        ...

    @abstractmethod
    def create_occurrence(self, occurrence: Occurrence) -> Occurrence:
        """Persist an occurrence for the event named by occurrence.event_id."""
        ...

    @abstractmethod
    def delete_occurrences(self, event_id: EventId) -> int:
        """Delete every occurrence of an event. Return the number deleted."""
        ...
