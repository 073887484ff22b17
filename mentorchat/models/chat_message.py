"""
Chat message models.

A message body is either a single text (`message`) or a list of summary
records (`message_list`, AI_RESPONSE only).
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator

from mentorchat.models.enums import MessageType, SenderType
from mentorchat.utils.datetime_utils import format_wire_time, truncate_to_second


class SummaryRecord(BaseModel):
    """One similar prior Q&A pair returned by the similarity service."""

    model_config = ConfigDict(populate_by_name=True)

    original_question: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("original_question", "question_origin"),
        description="Question as it was originally asked",
    )
    summarized_question: str = Field(
        ...,
        validation_alias=AliasChoices("summarized_question", "question_summary"),
        description="Condensed form of the matched question",
    )
    matched_answer: str = Field(
        ...,
        validation_alias=AliasChoices("matched_answer", "answer"),
        description="Mentor answer to the matched question",
    )
    similarity: Optional[float] = Field(None, description="Similarity score")
    source_room_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("source_room_id", "room_id"),
        description="Room the matched conversation came from",
    )


class ChatMessageBase(BaseModel):
    """Base chat message fields."""

    room_id: str = Field(..., max_length=36, description="Room ID")
    sender_type: SenderType
    sender_nickname: str = Field(..., max_length=100)
    message: Optional[str] = Field(None, max_length=100000, description="Text body")
    message_list: Optional[list[SummaryRecord]] = Field(
        None, description="Summary records (AI_RESPONSE body)"
    )
    message_type: MessageType
    time: datetime
    in_response_to: Optional[int] = Field(
        None, description="QUESTION id an AI_RESPONSE answers"
    )


class ChatMessageCreate(ChatMessageBase):
    """Schema for persisting a chat message."""

    @field_validator("time")
    @classmethod
    def _truncate_time(cls, value: datetime) -> datetime:
        return truncate_to_second(value)


class ChatMessage(ChatMessageBase):
    """Persisted chat message."""

    id: int


class MessageRequest(BaseModel):
    """Message sent by a client into a room."""

    sender_type: SenderType
    sender_nickname: str = Field(..., min_length=1, max_length=100)
    message: str = Field(..., min_length=1, max_length=100000)
    message_type: MessageType = MessageType.TALK
    # Validated by the services so a bad value maps to TIME_INPUT_INVALID
    time: str = Field(..., description="yyyy-MM-dd HH:mm:ss")


class MessageResponse(BaseModel):
    """Chat message as returned to clients, with optional display order."""

    id: int
    order: Optional[int] = None
    room_id: str
    sender_type: SenderType
    sender_nickname: str
    message: Optional[str] = None
    message_list: Optional[list[SummaryRecord]] = None
    message_type: MessageType
    time: datetime
    in_response_to: Optional[int] = None

    @field_serializer("time", when_used="json")
    def _serialize_time(self, value: datetime) -> str:
        return format_wire_time(value)

    @classmethod
    def from_message(cls, message: ChatMessage, order: Optional[int] = None) -> "MessageResponse":
        """Build a response from a stored message."""
        return cls(order=order, **message.model_dump())
