"""Serializers for transforming domain models to API responses."""

from rest_framework import serializers


class OccurrenceSerializer(serializers.Serializer):
    """Serializer for Occurrence domain model."""

    start = serializers.DateTimeField()
    end = serializers.DateTimeField()


class RepeatRuleSerializer(serializers.Serializer):
    """Serializer for RepeatRule value object."""

    frequency = serializers.CharField(source="frequency.value")
    interval = serializers.IntegerField()
    count = serializers.IntegerField(allow_null=True)
    until = serializers.DateTimeField(allow_null=True)
    dates = serializers.ListField(child=serializers.DateField())


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField(source="attributes.title")
    description = serializers.CharField(source="attributes.description")
    start = serializers.DateTimeField(source="attributes.start")
    end = serializers.DateTimeField(source="attributes.end")
    all_day = serializers.BooleanField(source="attributes.all_day")
    border_color = serializers.CharField(source="attributes.border_color", allow_null=True)
    background_color = serializers.CharField(
        source="attributes.background_color", allow_null=True
    )
    text_color = serializers.CharField(source="attributes.text_color", allow_null=True)
    repeat = RepeatRuleSerializer(source="attributes.repeat")
    occurrences = OccurrenceSerializer(many=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
