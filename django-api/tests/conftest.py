"""Pytest configuration and shared fixtures."""

from collections import Counter
from datetime import timezone

import pytest
from django.core.cache import caches
from rest_framework.test import APIClient

from calendar_events.domain.recurrence import RecurrenceEngine
from calendar_events.services import EventService
from calendar_events.stores import CacheLayer, DjangoEventStore


class CountingStore(DjangoEventStore):
    """Django store that records how often each read hits the database."""

    def __init__(self) -> None:
        self.calls: Counter[str] = Counter()

    def get_event(self, event_id):
        self.calls["get_event"] += 1
        return super().get_event(event_id)

    def list_events(self):
        self.calls["list_events"] += 1
        return super().list_events()


class BrokenBackend:
    """Cache backend whose every operation fails, like an unreachable server."""

    def has_key(self, key, version=None):
        raise ConnectionError("cache down")

    def get(self, key, default=None, version=None):
        raise ConnectionError("cache down")

    def set(self, key, value, timeout=None, version=None):
        raise ConnectionError("cache down")

    def delete(self, key, version=None):
        raise ConnectionError("cache down")


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def engine() -> RecurrenceEngine:
    return RecurrenceEngine(default_timezone=timezone.utc)


@pytest.fixture
def store() -> CountingStore:
    return CountingStore()


@pytest.fixture
def cache_layer() -> CacheLayer:
    return CacheLayer(caches["default"])


@pytest.fixture
def broken_cache_layer() -> CacheLayer:
    return CacheLayer(BrokenBackend())


@pytest.fixture
def service(engine, store, cache_layer) -> EventService:
    return EventService(engine=engine, store=store, cache=cache_layer)


@pytest.fixture
def weekly_event_data() -> dict:
    return {
        "title": "Team sync",
        "description": "Weekly status",
        "start": "2024-01-01T09:00:00+00:00",
        "end": "2024-01-01T10:00:00+00:00",
        "repeat": {"frequency": "weekly", "count": 3},
    }
