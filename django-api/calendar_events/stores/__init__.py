from calendar_events.stores.cache import ALL_EVENTS_KEY, CacheLayer, event_key
from calendar_events.stores.django_store import DjangoEventStore
from calendar_events.stores.interfaces import EventStore

__all__ = [
    "ALL_EVENTS_KEY",
    "CacheLayer",
    "DjangoEventStore",
    "EventStore",
    "event_key",
]
