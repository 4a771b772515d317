"""Django ORM implementation of the EventStore."""

import logging
from collections.abc import Callable
from datetime import date
from typing import Any, TypeVar

from django.db import DatabaseError
from django.utils import timezone

from calendar_events.domain import (
    Event,
    EventAttributes,
    EventId,
    Occurrence,
    RepeatFrequency,
    RepeatRule,
)
from calendar_events.domain.errors import PersistenceError
from calendar_events.models import CalendarEventRecord, OccurrenceRecord
from calendar_events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DjangoEventStore(EventStore):
    """Relational event store using the Django ORM."""

    def create_event(self, attributes: EventAttributes) -> Event:
        record = self._run(
            "create_event",
            lambda: CalendarEventRecord.objects.create(**_record_fields(attributes)),
        )
        return _to_event(record, occurrences=())

    def get_event(self, event_id: EventId) -> Event | None:
        def fetch() -> CalendarEventRecord | None:
            return (
                CalendarEventRecord.objects.prefetch_related("occurrences")
                .filter(id=event_id.value)
                .first()
            )

        record = self._run("get_event", fetch)
        if record is None:
            return None
        return _to_event(record)

    def list_events(self) -> list[Event]:
        records = self._run(
            "list_events",
            lambda: list(CalendarEventRecord.objects.prefetch_related("occurrences")),
        )
        return [_to_event(record) for record in records]

    def update_event(self, event_id: EventId, attributes: EventAttributes) -> int:
        # queryset.update() bypasses auto_now
        fields = _record_fields(attributes)
        fields["updated_at"] = timezone.now()
        return self._run(
            "update_event",
            lambda: CalendarEventRecord.objects.filter(id=event_id.value).update(**fields),
        )

    def delete_event(self, event_id: EventId) -> int:
        def delete() -> int:
            _, per_model = CalendarEventRecord.objects.filter(id=event_id.value).delete()
            return per_model.get(CalendarEventRecord._meta.label, 0)

        return self._run("delete_event", delete)

    def create_occurrence(self, occurrence: Occurrence) -> Occurrence:
        record = self._run(
            "create_occurrence",
            lambda: OccurrenceRecord.objects.create(
                event_id=occurrence.event_id.value,
                start=occurrence.start,
                end=occurrence.end,
            ),
        )
        return _to_occurrence(record)

    def delete_occurrences(self, event_id: EventId) -> int:
        def delete() -> int:
            deleted, _ = OccurrenceRecord.objects.filter(event_id=event_id.value).delete()
            return deleted

        return self._run("delete_occurrences", delete)

    def _run(self, operation: str, query: Callable[[], T]) -> T:
        try:
            return query()
        except DatabaseError as exc:
            logger.exception("Event store operation %s failed", operation)
            raise PersistenceError(operation) from exc


def _record_fields(attributes: EventAttributes) -> dict[str, Any]:
    repeat = attributes.repeat
    return {
        "title": attributes.title,
        "description": attributes.description,
        "start": attributes.start,
        "end": attributes.end,
        "all_day": attributes.all_day,
        "border_color": attributes.border_color,
        "background_color": attributes.background_color,
        "text_color": attributes.text_color,
        "repeat_frequency": repeat.frequency.value,
        "repeat_interval": repeat.interval,
        "repeat_count": repeat.count,
        "repeat_until": repeat.until,
        "repeat_dates": [day.isoformat() for day in repeat.dates],
    }


def _to_event(
    record: CalendarEventRecord, occurrences: tuple[Occurrence, ...] | None = None
) -> Event:
    if occurrences is None:
        occurrences = tuple(_to_occurrence(row) for row in record.occurrences.all())
    repeat = RepeatRule(
        frequency=RepeatFrequency(record.repeat_frequency),
        interval=record.repeat_interval,
        count=record.repeat_count,
        until=record.repeat_until,
        dates=tuple(date.fromisoformat(day) for day in record.repeat_dates),
    )
    attributes = EventAttributes(
        title=record.title,
        description=record.description,
        start=record.start,
        end=record.end,
        all_day=record.all_day,
        border_color=record.border_color,
        background_color=record.background_color,
        text_color=record.text_color,
        repeat=repeat,
    )
    return Event(
        id=EventId(value=record.id),
        attributes=attributes,
        created_at=record.created_at,
        updated_at=record.updated_at,
        occurrences=occurrences,
    )


def _to_occurrence(record: OccurrenceRecord) -> Occurrence:
    return Occurrence(event_id=EventId(value=record.event_id), start=record.start, end=record.end)
