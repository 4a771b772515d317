"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Self
from uuid import UUID

from calendar_events.domain.errors import InvalidEventIdError


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        try:
            return cls(value=UUID(str(value)))
        except ValueError as exc:
            raise InvalidEventIdError() from exc

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class DateRange:
    """A concrete [start, end) interval. Ordered by start, then end."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError("DateRange end must be after start")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


class RepeatFrequency(Enum):
    """How often a repeat rule fires."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class RepeatRule:
    """Repeat specification for an event.

    ``count`` caps the total number of occurrences, the base range and
    custom dates included. ``until`` bounds every occurrence start. ``dates``
    are extra calendar days repeated at the base start time.
    """

    frequency: RepeatFrequency = RepeatFrequency.NONE
    interval: int = 1
    count: int | None = None
    until: datetime | None = None
    dates: tuple[date, ...] = ()

    def __post_init__(self) -> None:
        if self.interval < 1:
            raise ValueError("Repeat interval must be positive")
        if self.count is not None and self.count < 1:
            raise ValueError("Repeat count must be positive")
        if self.frequency is not RepeatFrequency.NONE and self.count is None and self.until is None:
            raise ValueError("Repeating rules need a count or an until bound")

    @property
    def is_repeating(self) -> bool:
        return self.frequency is not RepeatFrequency.NONE or bool(self.dates)
