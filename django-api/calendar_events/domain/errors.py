"""Domain error codes for the calendar events module."""

from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    INVALID_EVENT_DATA = "INVALID_EVENT_DATA"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class ValidationError(DomainError):
    """Raised when event input is missing, malformed or contradictory."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_EVENT_DATA, message=message)
        self.field = field


class PersistenceError(DomainError):
    """Raised when the underlying store fails to read or write."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.PERSISTENCE_FAILURE,
            message="Event storage is unavailable",
        )
        self.operation = operation
