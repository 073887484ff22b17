"""
Unit tests for chat history ordering helpers.
"""

from datetime import datetime, timedelta

import pytest

from mentorchat.core.exceptions import ErrorCode, ValidationError
from mentorchat.models.chat_message import ChatMessage, SummaryRecord
from mentorchat.models.enums import MessageType, SenderType
from mentorchat.services.message_ordering import (
    is_bare_welcome,
    number_chronologically,
    ordering_key,
    page_to_limit_offset,
    preview_text,
)

BASE = datetime(2024, 1, 1, 10, 0, 0)


def _message(
    message_id: int,
    offset_seconds: int = 0,
    message_type: MessageType = MessageType.TALK,
    text: str | None = "hi",
) -> ChatMessage:
    return ChatMessage(
        id=message_id,
        room_id="room_1",
        sender_type=SenderType.MENTEE,
        sender_nickname="mentee",
        message=text,
        message_type=message_type,
        time=BASE + timedelta(seconds=offset_seconds),
    )


class TestOrderingKey:
    def test_newer_time_comes_first(self):
        ordered = sorted([_message(1, 0), _message(2, 5), _message(3, 2)], key=ordering_key, reverse=True)
        assert [m.id for m in ordered] == [2, 3, 1]

    def test_equal_time_breaks_ties_by_id(self):
        ordered = sorted([_message(4, 0), _message(9, 0), _message(7, 0)], key=ordering_key, reverse=True)
        assert [m.id for m in ordered] == [9, 7, 4]


class TestNumberChronologically:
    def test_reverses_and_numbers_from_one(self):
        recent_first = [_message(3, 20), _message(2, 10), _message(1, 0)]
        numbered = number_chronologically(recent_first)

        assert [m.id for m in numbered] == [1, 2, 3]
        assert [m.order for m in numbered] == [1, 2, 3]

    def test_empty_window(self):
        assert number_chronologically([]) == []

    def test_response_time_serializes_in_wire_format(self):
        numbered = number_chronologically([_message(1, 0)])
        dumped = numbered[0].model_dump(mode="json")
        assert dumped["time"] == "2024-01-01 10:00:00"


class TestIsBareWelcome:
    def test_single_enter_message(self):
        assert is_bare_welcome([_message(1, message_type=MessageType.ENTER)]) is True

    def test_single_talk_message(self):
        assert is_bare_welcome([_message(1)]) is False

    def test_enter_plus_talk(self):
        messages = [_message(2, 5), _message(1, 0, message_type=MessageType.ENTER)]
        assert is_bare_welcome(messages) is False

    def test_no_messages(self):
        assert is_bare_welcome([]) is False


class TestPageToLimitOffset:
    def test_first_page(self):
        assert page_to_limit_offset(1, 10) == (10, 0)

    def test_third_page(self):
        assert page_to_limit_offset(3, 10) == (10, 20)

    @pytest.mark.parametrize("page,size", [(0, 10), (1, 0), (1, 101), (-1, 5)])
    def test_rejects_out_of_range(self, page, size):
        with pytest.raises(ValidationError) as exc_info:
            page_to_limit_offset(page, size)
        assert exc_info.value.code == ErrorCode.PAGE_INPUT_INVALID


class TestPreviewText:
    def test_text_message(self):
        assert preview_text(_message(1, text="hello")) == "hello"

    def test_ai_response_uses_first_summary(self):
        message = _message(1, message_type=MessageType.AI_RESPONSE, text=None)
        message.message_list = [
            SummaryRecord(summarized_question="learning Go basics", matched_answer="Start with the tour"),
        ]
        assert preview_text(message) == "learning Go basics"

    def test_ai_response_without_matches(self):
        message = _message(1, message_type=MessageType.AI_RESPONSE, text=None)
        message.message_list = []
        assert preview_text(message) is None
