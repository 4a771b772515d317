import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CalendarEventRecord",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("start", models.DateTimeField()),
                ("end", models.DateTimeField()),
                ("all_day", models.BooleanField(default=False)),
                ("border_color", models.CharField(blank=True, max_length=7, null=True)),
                ("background_color", models.CharField(blank=True, max_length=7, null=True)),
                ("text_color", models.CharField(blank=True, max_length=7, null=True)),
                (
                    "repeat_frequency",
                    models.CharField(
                        choices=[
                            ("none", "None"),
                            ("daily", "Daily"),
                            ("weekly", "Weekly"),
                            ("monthly", "Monthly"),
                        ],
                        default="none",
                        max_length=16,
                    ),
                ),
                ("repeat_interval", models.PositiveIntegerField(default=1)),
                ("repeat_count", models.PositiveIntegerField(blank=True, null=True)),
                ("repeat_until", models.DateTimeField(blank=True, null=True)),
                ("repeat_dates", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "calendar_events",
                "ordering": ["start"],
                "indexes": [models.Index(fields=["start"], name="calendar_events_start_idx")],
            },
        ),
        migrations.CreateModel(
            name="OccurrenceRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start", models.DateTimeField()),
                ("end", models.DateTimeField()),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="occurrences",
                        to="calendar_events.calendareventrecord",
                    ),
                ),
            ],
            options={
                "db_table": "calendar_event_occurrences",
                "ordering": ["start"],
                "indexes": [models.Index(fields=["event", "start"], name="calendar_occ_event_start_idx")],
            },
        ),
    ]
