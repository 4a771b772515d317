"""App settings, read from the ``CALENDAR_EVENTS`` dict in Django settings."""

from dataclasses import dataclass
from typing import Any, Self

from django.conf import settings

from calendar_events.domain.recurrence import DEFAULT_MAX_OCCURRENCES

DEFAULT_CACHE_TTL = 10


@dataclass(frozen=True)
class CalendarEventsSettings:
    """Configuration for the calendar events app.

    Attributes:
        cache_alias: Django cache alias backing the cache layer.
        cache_ttl: Lifetime in seconds of single-event and all-events entries.
        max_occurrences: Upper bound on occurrences produced by one event.
        purge_on_delete: Drop the single-event cache entry when an event is deleted.
    """

    cache_alias: str = "default"
    cache_ttl: int = DEFAULT_CACHE_TTL
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES
    purge_on_delete: bool = True

    @classmethod
    def from_django(cls) -> Self:
        options: dict[str, Any] = getattr(settings, "CALENDAR_EVENTS", {})
        return cls(
            cache_alias=options.get("CACHE_ALIAS", "default"),
            cache_ttl=options.get("CACHE_TTL", DEFAULT_CACHE_TTL),
            max_occurrences=options.get("MAX_OCCURRENCES", DEFAULT_MAX_OCCURRENCES),
            purge_on_delete=options.get("PURGE_ON_DELETE", True),
        )
