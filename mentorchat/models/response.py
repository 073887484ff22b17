"""
API response envelope.
"""

from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class SuccessCode(Enum):
    """Client-facing success codes: (http status, message)."""

    MESSAGE_CREATED = (201, "Welcome message created. Start the conversation.")
    MESSAGE_LOAD_SUCCESS = (200, "Chat history loaded.")
    MESSAGE_SEND_SUCCESS = (201, "Message sent.")
    AI_RESPONSE_CREATED = (201, "AI response created.")
    GET_ROOMS_AVAILABLE = (200, "Rooms loaded.")
    GET_ROOMS_AND_NOT_EXISTS = (200, "No chat rooms yet.")

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for every API response."""

    code: int
    message: str
    data: Optional[T] = None

    @classmethod
    def success(cls, code: SuccessCode, data: Optional[T] = None) -> "ApiResponse[T]":
        return cls(code=code.status_code, message=code.message, data=data)


class ErrorResponse(BaseModel):
    """Body of an error response."""

    code: int
    kind: str
    error: str
    message: str
