"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from collections.abc import Callable
from typing import Any

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from calendar_events.domain.errors import (
    DomainError,
    EventNotFoundError,
    InvalidEventIdError,
    PersistenceError,
    ValidationError,
)
from calendar_events.handlers.serializers import EventSerializer
from calendar_events.services import EventService, build_event_service

_ERROR_STATUS: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (InvalidEventIdError, status.HTTP_400_BAD_REQUEST),
    (EventNotFoundError, status.HTTP_404_NOT_FOUND),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def error_response(error: DomainError) -> Response:
    """Map a domain error to a response carrying only its code and safe message."""
    body: dict[str, Any] = {"code": error.code.value, "message": error.message}
    if isinstance(error, ValidationError):
        body["field"] = error.field
    status_code = next(
        (code for kind, code in _ERROR_STATUS if isinstance(error, kind)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return Response({"error": body}, status=status_code)


class EventView(APIView):
    """Base view holding the event service factory."""

    service_factory: Callable[[], EventService] = staticmethod(build_event_service)

    def get_service(self) -> EventService:
        return self.service_factory()

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            return error_response(exc)
        return super().handle_exception(exc)


class EventListView(EventView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        events = self.get_service().get_all_events().values()
        ordered = sorted(events, key=lambda event: event.attributes.start)
        return Response(EventSerializer(ordered, many=True).data)

    def post(self, request: Request) -> Response:
        event = self.get_service().create_event(request.data)
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(EventView):
    """Handler for GET/PUT/DELETE /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        event = self.get_service().get_event(event_id)
        return Response(EventSerializer(event).data)

    def put(self, request: Request, event_id: str) -> Response:
        event = self.get_service().update_event(event_id, request.data)
        return Response(EventSerializer(event).data)

    def delete(self, request: Request, event_id: str) -> Response:
        self.get_service().delete_event(event_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
