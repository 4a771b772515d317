"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores) and an injected cache layer
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Every write goes to the store first, then overwrites the single-event cache
entry and patches the all-events entry in place. Nothing is retried and
concurrent writers to the same event are not isolated from each other.
"""

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from calendar_events.conf import DEFAULT_CACHE_TTL
from calendar_events.domain import DateRange, Event, EventId, Occurrence
from calendar_events.domain.errors import EventNotFoundError
from calendar_events.domain.recurrence import RecurrenceEngine
from calendar_events.stores.cache import ALL_EVENTS_KEY, CacheLayer, event_key
from calendar_events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


class EventService:
    """Service for calendar event operations."""

    def __init__(
        self,
        engine: RecurrenceEngine,
        store: EventStore,
        cache: CacheLayer,
        cache_ttl: int = DEFAULT_CACHE_TTL,
        purge_on_delete: bool = True,
    ) -> None:
        self._engine = engine
        self._store = store
        self._cache = cache
        self.cache_ttl = cache_ttl
        self.purge_on_delete = purge_on_delete

    @property
    def cache_ttl(self) -> int:
        """TTL in seconds applied to subsequent cache writes."""
        return self._cache_ttl

    @cache_ttl.setter
    def cache_ttl(self, value: int) -> None:
        if value <= 0:
            raise ValueError("cache_ttl must be positive")
        self._cache_ttl = value

    def create_event(self, data: Mapping[str, Any]) -> Event:
        """Create an event and its occurrences.

        Raises:
            ValidationError: If the input is malformed.
            PersistenceError: If the store fails. No cache write happens
                when the event row itself could not be created.
        """
        attributes = self._engine.build_event_attributes(data)
        ranges = self._engine.expand(attributes)

        created = self._store.create_event(attributes)
        event = self._attach_occurrences(created, ranges)
        logger.info("Created event %s with %d occurrences", event.id, len(event.occurrences))

        self._cache.put(event_key(event.id), event, self.cache_ttl)
        self._patch_all_events(event.id, event)
        return event

    def get_event(self, event_id: EventId | str) -> Event:
        """Return an event with its occurrences.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event_id = _as_event_id(event_id)
        key = event_key(event_id)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        event = self._store.get_event(event_id)
        if event is None:
            raise EventNotFoundError(str(event_id))
        self._cache.put(key, event, self.cache_ttl)
        return event

    def get_all_events(self) -> dict[EventId, Event]:
        """Return every event keyed by id."""
        cached = self._cache.get(ALL_EVENTS_KEY)
        if cached is not None:
            return cached

        all_events = {event.id: event for event in self._store.list_events()}
        self._cache.put(ALL_EVENTS_KEY, all_events, self.cache_ttl)
        return all_events

    def update_event(self, event_id: EventId | str, data: Mapping[str, Any]) -> Event:
        """Replace an event's attributes and regenerate all of its occurrences.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            ValidationError: If the input is malformed.
            EventNotFoundError: If the event does not exist when re-fetched.
            PersistenceError: If the store fails.
        """
        event_id = _as_event_id(event_id)
        attributes = self._engine.build_event_attributes(data)
        ranges = self._engine.expand(attributes)

        self._store.delete_occurrences(event_id)
        self._store.update_event(event_id, attributes)
        updated = self._store.get_event(event_id)
        if updated is None:
            raise EventNotFoundError(str(event_id))
        event = self._attach_occurrences(updated, ranges)
        logger.info("Updated event %s with %d occurrences", event.id, len(event.occurrences))

        self._cache.put(event_key(event.id), event, self.cache_ttl)
        self._patch_all_events(event.id, event)
        return event

    def delete_event(self, event_id: EventId | str) -> None:
        """Delete an event and its occurrences.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            PersistenceError: If the store fails.
        """
        event_id = _as_event_id(event_id)
        deleted = self._store.delete_event(event_id)

        # the id may still be cached after a concurrent or out-of-band delete
        self._patch_all_events(event_id, None)
        if self.purge_on_delete:
            self._cache.delete(event_key(event_id))

        if not deleted:
            raise EventNotFoundError(str(event_id))
        logger.info("Deleted event %s", event_id)

    def _attach_occurrences(self, event: Event, ranges: list[DateRange]) -> Event:
        occurrences = tuple(
            self._store.create_occurrence(
                Occurrence(event_id=event.id, start=date_range.start, end=date_range.end)
            )
            for date_range in ranges
        )
        return replace(event, occurrences=occurrences)

    def _patch_all_events(self, event_id: EventId, event: Event | None) -> None:
        """Upsert or remove one entry of the all-events mapping and re-cache it."""
        all_events = dict(self.get_all_events())
        if event is None:
            all_events.pop(event_id, None)
        else:
            all_events[event_id] = event
        self._cache.put(ALL_EVENTS_KEY, all_events, self.cache_ttl)


def _as_event_id(event_id: EventId | str) -> EventId:
    if isinstance(event_id, EventId):
        return event_id
    return EventId.from_string(event_id)
