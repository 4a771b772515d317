"""Tests for the Django ORM event store.

Run with: pytest tests/test_stores.py -v
"""

import uuid
from datetime import date, datetime, timedelta, timezone

import pytest
from django.db import DatabaseError

from calendar_events.domain import EventAttributes, EventId, Occurrence, RepeatFrequency, RepeatRule
from calendar_events.domain.errors import PersistenceError
from calendar_events.models import CalendarEventRecord, OccurrenceRecord
from calendar_events.stores import DjangoEventStore

NINE = datetime(2024, 1, 1, 9, tzinfo=timezone.utc)


def _attributes(**overrides) -> EventAttributes:
    fields = {"title": "Review", "start": NINE, "end": NINE + timedelta(hours=1)}
    fields.update(overrides)
    return EventAttributes(**fields)


def _add_occurrence(store: DjangoEventStore, event_id: EventId, days: int) -> Occurrence:
    start = NINE + timedelta(days=days)
    return store.create_occurrence(
        Occurrence(event_id=event_id, start=start, end=start + timedelta(hours=1))
    )


@pytest.mark.django_db
class TestDjangoEventStore:
    """Tests for DjangoEventStore."""

    def test_create_assigns_id(self):
        """Creating an event returns it with a store-assigned ID."""
        event = DjangoEventStore().create_event(_attributes())
        assert isinstance(event.id, EventId)
        assert CalendarEventRecord.objects.filter(id=event.id.value).exists()
        assert event.occurrences == ()

    def test_repeat_rule_round_trips(self):
        repeat = RepeatRule(
            frequency=RepeatFrequency.WEEKLY,
            interval=2,
            count=4,
            until=NINE + timedelta(days=60),
            dates=(date(2024, 2, 1),),
        )
        store = DjangoEventStore()
        created = store.create_event(_attributes(repeat=repeat, text_color="#fff"))
        loaded = store.get_event(created.id)
        assert loaded.attributes.repeat == repeat
        assert loaded.attributes.text_color == "#fff"

    def test_get_event_loads_occurrences_in_order(self):
        """Occurrences come back eagerly, ordered by start."""
        store = DjangoEventStore()
        event = store.create_event(_attributes())
        _add_occurrence(store, event.id, 7)
        _add_occurrence(store, event.id, 0)
        loaded = store.get_event(event.id)
        assert [o.start for o in loaded.occurrences] == [NINE, NINE + timedelta(days=7)]
        assert all(o.event_id == event.id for o in loaded.occurrences)

    def test_get_missing_event_returns_none(self):
        assert DjangoEventStore().get_event(EventId(uuid.uuid4())) is None

    def test_list_events_includes_occurrences(self):
        store = DjangoEventStore()
        first = store.create_event(_attributes(title="First"))
        second = store.create_event(_attributes(title="Second"))
        _add_occurrence(store, second.id, 1)
        listed = {event.id: event for event in store.list_events()}
        assert set(listed) == {first.id, second.id}
        assert len(listed[second.id].occurrences) == 1

    def test_update_overwrites_attributes(self):
        store = DjangoEventStore()
        event = store.create_event(_attributes())
        assert store.update_event(event.id, _attributes(title="Renamed")) == 1
        assert store.get_event(event.id).attributes.title == "Renamed"

    def test_update_missing_event_updates_nothing(self):
        assert DjangoEventStore().update_event(EventId(uuid.uuid4()), _attributes()) == 0

    def test_delete_cascades_occurrences(self):
        """Deleting an event removes its occurrence rows."""
        store = DjangoEventStore()
        event = store.create_event(_attributes())
        _add_occurrence(store, event.id, 0)
        _add_occurrence(store, event.id, 1)
        assert store.delete_event(event.id) == 1
        assert OccurrenceRecord.objects.count() == 0
        assert store.delete_event(event.id) == 0

    def test_delete_occurrences_keeps_event(self):
        store = DjangoEventStore()
        event = store.create_event(_attributes())
        _add_occurrence(store, event.id, 0)
        _add_occurrence(store, event.id, 1)
        assert store.delete_occurrences(event.id) == 2
        assert store.get_event(event.id).occurrences == ()

    def test_database_error_becomes_persistence_error(self, monkeypatch):
        """Backend failures surface as PersistenceError."""

        def fail(**kwargs):
            raise DatabaseError("connection lost")

        monkeypatch.setattr(CalendarEventRecord.objects, "create", fail)
        with pytest.raises(PersistenceError) as excinfo:
            DjangoEventStore().create_event(_attributes())
        assert excinfo.value.operation == "create_event"
