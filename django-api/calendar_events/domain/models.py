"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in calendar_events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from calendar_events.domain.value_objects import DateRange, EventId, RepeatRule


@dataclass(frozen=True)
class EventAttributes:
    """Normalized scheduling attributes, the persisted shape of an Event."""

    title: str
    start: datetime
    end: datetime
    description: str = ""
    all_day: bool = False
    border_color: str | None = None
    background_color: str | None = None
    text_color: str | None = None
    repeat: RepeatRule = RepeatRule()

    @property
    def base_range(self) -> DateRange:
        return DateRange(start=self.start, end=self.end)


@dataclass(frozen=True)
class Occurrence:
    """Domain representation of one concrete occurrence of an Event."""

    event_id: EventId
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError("Occurrence end must be after start")

    @property
    def range(self) -> DateRange:
        return DateRange(start=self.start, end=self.end)


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    attributes: EventAttributes
    created_at: datetime
    updated_at: datetime
    occurrences: tuple[Occurrence, ...] = ()

    @property
    def title(self) -> str:
        return self.attributes.title
