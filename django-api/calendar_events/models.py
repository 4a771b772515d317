"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class CalendarEventRecord(models.Model):
    """Persistence model for calendar events."""

    class Frequency(models.TextChoices):
        NONE = "none"
        DAILY = "daily"
        WEEKLY = "weekly"
        MONTHLY = "monthly"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    start = models.DateTimeField()
    end = models.DateTimeField()
    all_day = models.BooleanField(default=False)
    border_color = models.CharField(max_length=7, blank=True, null=True)
    background_color = models.CharField(max_length=7, blank=True, null=True)
    text_color = models.CharField(max_length=7, blank=True, null=True)
    repeat_frequency = models.CharField(
        max_length=16, choices=Frequency.choices, default=Frequency.NONE
    )
    repeat_interval = models.PositiveIntegerField(default=1)
    repeat_count = models.PositiveIntegerField(blank=True, null=True)
    repeat_until = models.DateTimeField(blank=True, null=True)
    repeat_dates = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "calendar_events"
        ordering = ["start"]
        indexes = [
            models.Index(fields=["start"], name="calendar_events_start_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class OccurrenceRecord(models.Model):
    """Persistence model for the concrete occurrences of an event."""

    event = models.ForeignKey(
        CalendarEventRecord, on_delete=models.CASCADE, related_name="occurrences"
    )
    start = models.DateTimeField()
    end = models.DateTimeField()

    class Meta:
        db_table = "calendar_event_occurrences"
        ordering = ["start"]
        indexes = [
            models.Index(fields=["event", "start"], name="calendar_occ_event_start_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event_id} - {self.start}"
