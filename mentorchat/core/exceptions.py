"""
Custom exceptions for the application.

Every error carries one ErrorKind (what went wrong) and one ErrorCode
(what the client is told).
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Failure classification."""

    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"


class ErrorCode(Enum):
    """Client-facing error codes: (http status, message)."""

    TIME_INPUT_INVALID = (400, "Time format is invalid. Use yyyy-MM-dd HH:mm:ss.")
    TYPE_NOT_ALLOWED = (400, "Type must be MENTEE or MENTOR.")
    PAGE_INPUT_INVALID = (400, "Page must be >= 1 and size within 1..100.")
    MESSAGE_TYPE_NOT_ALLOWED = (400, "Only TALK and mentee QUESTION messages can be sent.")
    ROOM_NOT_FOUND = (404, "Chat room does not exist.")
    SERVER_ERROR = (500, "Internal server error. Please try again later.")

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message


class ChatError(Exception):
    """Base exception for mentorchat."""

    kind: ErrorKind = ErrorKind.PERSISTENCE_FAILURE
    code: ErrorCode = ErrorCode.SERVER_ERROR

    def __init__(
        self,
        message: str,
        details: Optional[Any] = None,
        code: Optional[ErrorCode] = None,
    ):
        self.message = message
        self.details = details
        if code is not None:
            self.code = code
        super().__init__(message)


class ValidationError(ChatError):
    """Malformed client input."""

    kind = ErrorKind.VALIDATION
    code = ErrorCode.TIME_INPUT_INVALID


class NotFoundError(ChatError):
    """Room or mentor not found."""

    kind = ErrorKind.NOT_FOUND
    code = ErrorCode.ROOM_NOT_FOUND


class UpstreamTimeoutError(ChatError):
    """Summarizer or similarity call exceeded its deadline."""

    kind = ErrorKind.UPSTREAM_TIMEOUT


class UpstreamError(ChatError):
    """Non-timeout failure from an external service."""

    kind = ErrorKind.UPSTREAM_ERROR


class PersistenceError(ChatError):
    """Store read or write failed."""

    kind = ErrorKind.PERSISTENCE_FAILURE
