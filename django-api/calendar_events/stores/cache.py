"""Best-effort cache fronting the event store.

The cache is never the system of record. Backend failures are logged and
reported as misses so reads fall through to the store and writes to the
store still succeed.
"""

import logging
from typing import Any

from django.core.cache import BaseCache

from calendar_events.domain import EventId

logger = logging.getLogger(__name__)

EVENT_KEY_PREFIX = "calendar_event_"
ALL_EVENTS_KEY = "all_calendar_events"

_MISS = object()


def event_key(event_id: EventId) -> str:
    """Cache key of the single-event entry for event_id."""
    return f"{EVENT_KEY_PREFIX}{event_id}"


class CacheLayer:
    """Keyed has/get/put/delete over a Django cache backend, failing open.

    EventService reads through ``get`` alone, since a has-then-get pair can
    see an entry expire in between. ``has`` is kept for host code that only
    needs to know whether an entry is present.
    """

    def __init__(self, backend: BaseCache) -> None:
        self._backend = backend

    def has(self, key: str) -> bool:
        try:
            return self._backend.has_key(key)
        except Exception:
            logger.warning("Cache has(%s) failed, treating as miss", key, exc_info=True)
            return False

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None on a miss or backend failure."""
        try:
            value = self._backend.get(key, _MISS)
        except Exception:
            logger.warning("Cache get(%s) failed, treating as miss", key, exc_info=True)
            return None
        if value is _MISS:
            logger.debug("Cache miss for %s", key)
            return None
        logger.debug("Cache hit for %s", key)
        return value

    def put(self, key: str, value: Any, ttl: int) -> None:
        try:
            self._backend.set(key, value, timeout=ttl)
        except Exception:
            logger.warning("Cache put(%s) failed", key, exc_info=True)

    def delete(self, key: str) -> None:
        try:
            self._backend.delete(key)
        except Exception:
            logger.warning("Cache delete(%s) failed", key, exc_info=True)
