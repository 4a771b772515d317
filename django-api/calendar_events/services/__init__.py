from django.core.cache import caches

from calendar_events.conf import CalendarEventsSettings
from calendar_events.domain.recurrence import RecurrenceEngine
from calendar_events.services.event_service import EventService
from calendar_events.stores import CacheLayer, DjangoEventStore

__all__ = ["EventService", "build_event_service"]


def build_event_service(options: CalendarEventsSettings | None = None) -> EventService:
    """Wire an EventService from Django settings. The caller owns the instance."""
    options = options or CalendarEventsSettings.from_django()
    return EventService(
        engine=RecurrenceEngine(max_occurrences=options.max_occurrences),
        store=DjangoEventStore(),
        cache=CacheLayer(caches[options.cache_alias]),
        cache_ttl=options.cache_ttl,
        purge_on_delete=options.purge_on_delete,
    )
