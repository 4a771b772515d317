from calendar_events.domain.models import Event, EventAttributes, Occurrence
from calendar_events.domain.value_objects import DateRange, EventId, RepeatFrequency, RepeatRule

__all__ = [
    "Event",
    "EventAttributes",
    "Occurrence",
    "EventId",
    "DateRange",
    "RepeatFrequency",
    "RepeatRule",
]
