"""
Ordering and pagination helpers for chat history.

Stored messages are read most-recent-first with the key (time DESC, id DESC).
Time has second precision, so id is the tie-break that keeps rapid
successive messages in a deterministic order.
"""

from __future__ import annotations

from typing import Sequence

from mentorchat.core.exceptions import ErrorCode, ValidationError
from mentorchat.models.chat_message import ChatMessage, MessageResponse
from mentorchat.models.enums import MessageType


MAX_PAGE_SIZE = 100


def ordering_key(message: ChatMessage) -> tuple:
    """Chronological sort key: (time, id)."""
    return (message.time, message.id)


def number_chronologically(recent_first: Sequence[ChatMessage]) -> list[MessageResponse]:
    """
    Turn a most-recent-first window into display order.

    The window is reversed so the oldest message comes first, then each
    message gets order = 1..N left to right.
    """
    chronological = list(reversed(recent_first))
    return [
        MessageResponse.from_message(message, order=index)
        for index, message in enumerate(chronological, start=1)
    ]


def is_bare_welcome(messages: Sequence[ChatMessage]) -> bool:
    """True when the only message of a room is its ENTER welcome."""
    return len(messages) == 1 and messages[0].message_type == MessageType.ENTER


def page_to_limit_offset(page: int, size: int) -> tuple[int, int]:
    """
    Convert a 1-based page number and page size to (limit, offset).

    Raises:
        ValidationError: If page < 1 or size is outside 1..MAX_PAGE_SIZE
    """
    if page < 1:
        raise ValidationError(f"page must be >= 1, got {page}", code=ErrorCode.PAGE_INPUT_INVALID)
    if size < 1 or size > MAX_PAGE_SIZE:
        raise ValidationError(f"size must be within 1..{MAX_PAGE_SIZE}, got {size}", code=ErrorCode.PAGE_INPUT_INVALID)
    return size, (page - 1) * size


def preview_text(message: ChatMessage) -> str | None:
    """Short text standing for a message in room listings."""
    if message.message:
        return message.message
    if message.message_list:
        return message.message_list[0].summarized_question
    return None
