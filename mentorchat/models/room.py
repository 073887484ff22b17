"""
Room models.

A room is the persistent pairing of one mentee and one mentor.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_serializer

from mentorchat.models.chat_message import MessageResponse
from mentorchat.utils.datetime_utils import format_wire_time


class Room(BaseModel):
    """Room model."""

    room_id: str = Field(..., max_length=36, description="Stable room ID")
    mentee_nickname: str = Field(..., max_length=100)
    mentor_nickname: str = Field(..., max_length=100)
    created_at: datetime


class EnterRoomRequest(BaseModel):
    """Request to open the chat room of a mentee/mentor pair."""

    mentee_nickname: str = Field(..., min_length=1, max_length=100)
    mentor_nickname: str = Field(..., min_length=1, max_length=100)


@dataclass
class EnterRoomResult:
    """Outcome of a room entry."""

    room: Room
    messages: list[MessageResponse] = field(default_factory=list)
    first_entry: bool = False
    has_history: bool = False


class RoomInfo(BaseModel):
    """Room list entry seen from one participant."""

    room_id: str
    nickname: str = Field(..., description="Counterpart nickname")
    last_message: Optional[str] = None
    last_message_time: Optional[datetime] = None

    @field_serializer("last_message_time", when_used="json-unless-none")
    def _serialize_time(self, value: datetime) -> str:
        return format_wire_time(value)


class EnterRoomResponse(BaseModel):
    """Payload answering a room entry."""

    room_id: str
    first_entry: bool
    has_history: bool
    messages: list[MessageResponse]

    @classmethod
    def from_result(cls, result: EnterRoomResult) -> "EnterRoomResponse":
        return cls(
            room_id=result.room.room_id,
            first_entry=result.first_entry,
            has_history=result.has_history,
            messages=result.messages,
        )
