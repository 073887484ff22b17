"""Pydantic models (schemas) for the application."""

from mentorchat.models.chat_message import (
    ChatMessage,
    ChatMessageCreate,
    MessageRequest,
    MessageResponse,
    SummaryRecord,
)
from mentorchat.models.enums import MessageType, SenderType
from mentorchat.models.response import ApiResponse, SuccessCode
from mentorchat.models.room import (
    EnterRoomRequest,
    EnterRoomResponse,
    EnterRoomResult,
    Room,
    RoomInfo,
)
from mentorchat.models.upstream import SimilarityRequest, UpstreamResult

__all__ = [
    "ApiResponse",
    "ChatMessage",
    "ChatMessageCreate",
    "EnterRoomRequest",
    "EnterRoomResponse",
    "EnterRoomResult",
    "MessageRequest",
    "MessageResponse",
    "MessageType",
    "Room",
    "RoomInfo",
    "SenderType",
    "SimilarityRequest",
    "SuccessCode",
    "SummaryRecord",
    "UpstreamResult",
]
