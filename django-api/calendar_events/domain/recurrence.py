"""Recurrence engine: normalizes raw event input and expands repeat rules.

Both entry points are pure with respect to storage. The only ambient input
is the timezone used to make naive datetimes aware, which defaults to the
current Django timezone.
"""

import logging
import re
from collections.abc import Mapping
from datetime import date, datetime, time, timedelta, tzinfo
from itertools import islice
from typing import Any

from dateutil import rrule
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from calendar_events.domain.errors import ValidationError
from calendar_events.domain.models import EventAttributes
from calendar_events.domain.value_objects import DateRange, RepeatFrequency, RepeatRule

logger = logging.getLogger(__name__)

DEFAULT_MAX_OCCURRENCES = 500
TITLE_MAX_LENGTH = 255

_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")
_COLOR_FIELDS = ("border_color", "background_color", "text_color")

_RRULE_FREQUENCIES = {
    RepeatFrequency.DAILY: rrule.DAILY,
    RepeatFrequency.WEEKLY: rrule.WEEKLY,
    RepeatFrequency.MONTHLY: rrule.MONTHLY,
}


class RecurrenceEngine:
    """Turns caller input into EventAttributes and concrete occurrence ranges."""

    def __init__(
        self,
        max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
        default_timezone: tzinfo | None = None,
    ) -> None:
        self.max_occurrences = max_occurrences
        self._default_timezone = default_timezone

    def build_event_attributes(self, data: Mapping[str, Any]) -> EventAttributes:
        """Validate input and project it into the persisted Event shape.

        Raises:
            ValidationError: If a required field is missing or malformed,
                or if the schedule is contradictory.
        """
        if not isinstance(data, Mapping):
            raise ValidationError("data", "Event data must be an object")

        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("title", "Title is required")
        title = title.strip()
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError("title", f"Title must be at most {TITLE_MAX_LENGTH} characters")

        description = data.get("description") or ""
        if not isinstance(description, str):
            raise ValidationError("description", "Description must be a string")

        all_day = data.get("all_day", False)
        if all_day is None:
            all_day = False
        if not isinstance(all_day, bool):
            raise ValidationError("all_day", "all_day must be a boolean")

        start = self._require_datetime(data, "start")
        end = self._require_datetime(data, "end")
        if all_day:
            start, end = _widen_to_days(start, end)
        if end <= start:
            raise ValidationError("end", "End must be after start")

        colors = {field: _parse_color(field, data.get(field)) for field in _COLOR_FIELDS}
        repeat = self._parse_repeat(data.get("repeat"), start)

        return EventAttributes(
            title=title,
            description=description,
            start=start,
            end=end,
            all_day=all_day,
            repeat=repeat,
            **colors,
        )

    def build_occurrences(self, data: Mapping[str, Any]) -> list[DateRange]:
        """Validate input and return every concrete occurrence, ascending."""
        return self.expand(self.build_event_attributes(data))

    def expand(self, attributes: EventAttributes) -> list[DateRange]:
        """Expand normalized attributes into occurrence ranges.

        Every range has the base duration. The base range is always part of
        the result, duplicates are dropped and the result is sorted. The
        ``until`` and ``count`` bounds apply to rule and custom dates alike.

        Raises:
            ValidationError: If the rule produces more than max_occurrences.
        """
        base = attributes.base_range
        rule = attributes.repeat
        if not rule.is_repeating:
            return [base]

        starts = [base.start]
        if rule.frequency is not RepeatFrequency.NONE:
            # count goes through islice, dateutil deprecates passing it with until
            series = rrule.rrule(
                _RRULE_FREQUENCIES[rule.frequency],
                dtstart=base.start,
                interval=rule.interval,
                until=rule.until,
            )
            limit = self.max_occurrences + 1
            if rule.count is not None:
                limit = min(rule.count, limit)
            starts.extend(islice(series, limit))

        wall_clock = base.start.timetz()
        starts.extend(datetime.combine(day, wall_clock) for day in rule.dates)
        if rule.until is not None:
            starts = [s for s in starts if s <= rule.until]

        duration = base.duration
        ranges = sorted({DateRange(start=s, end=s + duration) for s in starts})
        if rule.count is not None:
            ranges = ranges[: rule.count]
        if len(ranges) > self.max_occurrences:
            raise ValidationError(
                "repeat",
                f"Repeat rule produces more than {self.max_occurrences} occurrences",
            )
        logger.debug("Expanded %s rule into %d occurrences", rule.frequency.value, len(ranges))
        return ranges

    def _parse_repeat(self, raw: Any, start: datetime) -> RepeatRule:
        if raw is None:
            return RepeatRule()
        if not isinstance(raw, Mapping):
            raise ValidationError("repeat", "Repeat must be an object")

        try:
            frequency = RepeatFrequency(raw.get("frequency") or RepeatFrequency.NONE.value)
        except ValueError as exc:
            raise ValidationError("repeat.frequency", "Unknown repeat frequency") from exc

        interval = _positive_int("repeat.interval", raw.get("interval", 1))
        count = raw.get("count")
        if count is not None:
            count = _positive_int("repeat.count", count)

        until = raw.get("until")
        if until is not None:
            until = self._parse_bound("repeat.until", until)
            if until < start:
                raise ValidationError("repeat.until", "Repeat until must not precede start")

        dates = raw.get("dates") or ()
        if isinstance(dates, (str, bytes)) or not isinstance(dates, (list, tuple)):
            raise ValidationError("repeat.dates", "Repeat dates must be a list")
        days = tuple(_to_date("repeat.dates", value) for value in dates)
        if any(day < start.date() for day in days):
            raise ValidationError("repeat.dates", "Repeat dates must not precede start")

        try:
            return RepeatRule(
                frequency=frequency,
                interval=interval,
                count=count,
                until=until,
                dates=days,
            )
        except ValueError as exc:
            raise ValidationError("repeat", str(exc)) from exc

    def _require_datetime(self, data: Mapping[str, Any], field: str) -> datetime:
        value = data.get(field)
        if value is None or value == "":
            raise ValidationError(field, f"{field.capitalize()} is required")
        return self._to_datetime(field, value)

    def _to_datetime(self, field: str, value: Any) -> datetime:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime.combine(value, time.min)
        elif isinstance(value, str):
            parsed = _parse_datetime_string(field, value)
        else:
            raise ValidationError(field, f"{field} must be an ISO-8601 datetime")
        if timezone.is_naive(parsed):
            parsed = timezone.make_aware(parsed, self._timezone())
        return parsed.replace(microsecond=0)

    def _parse_bound(self, field: str, value: Any) -> datetime:
        """A bare date bounds through the end of that day."""
        day = None
        if isinstance(value, str):
            try:
                day = parse_date(value)
            except ValueError as exc:
                raise ValidationError(field, f"{field} is not a valid date") from exc
        elif isinstance(value, date) and not isinstance(value, datetime):
            day = value
        if day is not None:
            return timezone.make_aware(datetime.combine(day, time(23, 59, 59)), self._timezone())
        return self._to_datetime(field, value)

    def _timezone(self) -> tzinfo:
        return self._default_timezone or timezone.get_current_timezone()


def _parse_datetime_string(field: str, value: str) -> datetime:
    try:
        parsed = parse_datetime(value)
        if parsed is None:
            day = parse_date(value)
            if day is not None:
                parsed = datetime.combine(day, time.min)
    except ValueError as exc:
        raise ValidationError(field, f"{field} is not a valid datetime") from exc
    if parsed is None:
        raise ValidationError(field, f"{field} must be an ISO-8601 datetime")
    return parsed


def _to_date(field: str, value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            parsed = parse_date(value)
        except ValueError as exc:
            raise ValidationError(field, f"{value!r} is not a valid date") from exc
        if parsed is not None:
            return parsed
    raise ValidationError(field, f"{value!r} is not a valid date")


def _positive_int(field: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(field, f"{field} must be a positive integer")
    return value


def _parse_color(field: str, value: Any) -> str | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str) or not _COLOR_RE.match(value):
        raise ValidationError(field, f"{field} must be a hex colour like #1a2b3c")
    return value.lower()


def _widen_to_days(start: datetime, end: datetime) -> tuple[datetime, datetime]:
    """Stretch an all-day event from midnight of its first day to midnight after its last."""
    first = datetime.combine(start.date(), time.min, tzinfo=start.tzinfo)
    last = datetime.combine(end.date(), time.min, tzinfo=end.tzinfo)
    if last <= first or end != last:
        last += timedelta(days=1)
    return first, last
