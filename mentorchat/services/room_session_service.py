"""
Room Session Service.

Decides on room entry whether to bootstrap a new room with a welcome message
or replay the tail of its history in chronological order.
"""

from __future__ import annotations

from typing import Optional

from mentorchat.core.config import get_settings
from mentorchat.core.exceptions import ErrorCode, NotFoundError, ValidationError
from mentorchat.core.logger import logger
from mentorchat.interfaces.message_repository import IMessageRepository
from mentorchat.interfaces.room_repository import IRoomRepository
from mentorchat.models.chat_message import ChatMessage, ChatMessageCreate, MessageResponse
from mentorchat.models.enums import MessageType, SenderType
from mentorchat.models.response import SuccessCode
from mentorchat.models.room import EnterRoomResult, Room, RoomInfo
from mentorchat.services.message_ordering import (
    is_bare_welcome,
    number_chronologically,
    ordering_key,
    page_to_limit_offset,
    preview_text,
)
from mentorchat.utils.datetime_utils import now_server


def build_welcome_text(mentee_nickname: str, mentor_nickname: str) -> str:
    """Greeting sent by the mentor when a room is first opened."""
    return (
        f"Hello {mentee_nickname}!\n"
        f"I'm your mentor {mentor_nickname}. Please enter your question."
    )


class RoomSessionManager:
    """Room entry, history replay and room listing."""

    def __init__(
        self,
        room_repo: IRoomRepository,
        message_repo: IMessageRepository,
        page_size: Optional[int] = None,
    ):
        self._room_repo = room_repo
        self._message_repo = message_repo
        self._page_size = page_size or get_settings().ENTRY_PAGE_SIZE

    async def enter_room(self, mentee_nickname: str, mentor_nickname: str) -> EnterRoomResult:
        """
        Open the room of a mentee/mentor pair.

        Three outcomes:
        - no messages yet: a welcome message is persisted and returned alone
        - only the welcome message: it is returned unchanged (still a first visit)
        - anything richer: the most recent page is returned oldest-first with
          order = 1..N

        Welcome-only results carry no order index.

        Args:
            mentee_nickname: Mentee nickname
            mentor_nickname: Mentor nickname

        Returns:
            EnterRoomResult with first_entry / has_history flags for the caller

        Raises:
            PersistenceError: If the room or welcome message cannot be stored
        """
        room = await self._room_repo.find_or_create(mentee_nickname, mentor_nickname)
        recent = await self._message_repo.query_by_room(room.room_id, limit=self._page_size)

        if not recent:
            welcome = await self.send_welcome_message(room)
            return EnterRoomResult(
                room=room,
                messages=[MessageResponse.from_message(welcome)],
                first_entry=True,
                has_history=False,
            )

        if is_bare_welcome(recent):
            return EnterRoomResult(
                room=room,
                messages=[MessageResponse.from_message(recent[0])],
                first_entry=True,
                has_history=False,
            )

        return EnterRoomResult(
            room=room,
            messages=number_chronologically(recent),
            first_entry=False,
            has_history=len(recent) > 1,
        )

    async def send_welcome_message(self, room: Room) -> ChatMessage:
        """
        Persist the mentor's greeting for a freshly opened room.

        Simultaneous first entries share one greeting.
        """
        welcome = ChatMessageCreate(
            room_id=room.room_id,
            sender_type=SenderType.MENTOR,
            sender_nickname=room.mentor_nickname,
            message=build_welcome_text(room.mentee_nickname, room.mentor_nickname),
            message_type=MessageType.ENTER,
            time=now_server(),
        )
        saved = await self._message_repo.save_welcome(welcome)
        logger.info(f"Sent welcome message {saved.id} in room {room.room_id}")
        return saved

    @staticmethod
    def success_code(result: EnterRoomResult) -> SuccessCode:
        """Success code the transport answers a room entry with."""
        if result.first_entry:
            return SuccessCode.MESSAGE_CREATED
        return SuccessCode.MESSAGE_LOAD_SUCCESS

    async def get_history(self, room_id: str, page: int = 1, size: int = 10) -> list[MessageResponse]:
        """
        Get one page of a room's history, oldest-first within the page.

        Page 1 is the most recent window; equal-second messages keep the
        same relative order across calls.
        """
        limit, offset = page_to_limit_offset(page, size)
        room = await self._room_repo.get(room_id)
        if room is None:
            raise NotFoundError(f"Room {room_id} not found")
        window = await self._message_repo.query_by_room(room_id, limit=limit, offset=offset)
        return number_chronologically(window)

    async def list_rooms(self, nickname: str, role: str) -> list[RoomInfo]:
        """
        List the rooms of a participant, most recently active first.

        Args:
            nickname: Participant nickname
            role: "MENTEE" or "MENTOR"

        Returns:
            RoomInfo list; rooms without messages come last

        Raises:
            ValidationError: If role is neither MENTEE nor MENTOR
        """
        try:
            sender_type = SenderType(role.upper())
        except ValueError:
            raise ValidationError(f"Unknown role: {role}", code=ErrorCode.TYPE_NOT_ALLOWED) from None

        if sender_type == SenderType.MENTEE:
            rooms = await self._room_repo.list_for_mentee(nickname)
        else:
            rooms = await self._room_repo.list_for_mentor(nickname)

        latest = [await self._message_repo.latest_for_room(room.room_id) for room in rooms]

        active: list[tuple[ChatMessage, RoomInfo]] = []
        idle: list[RoomInfo] = []
        for room, last in zip(rooms, latest):
            counterpart = room.mentor_nickname if sender_type == SenderType.MENTEE else room.mentee_nickname
            if last is None:
                idle.append(RoomInfo(room_id=room.room_id, nickname=counterpart))
                continue
            active.append(
                (
                    last,
                    RoomInfo(
                        room_id=room.room_id,
                        nickname=counterpart,
                        last_message=preview_text(last),
                        last_message_time=last.time,
                    ),
                )
            )

        active.sort(key=lambda pair: ordering_key(pair[0]), reverse=True)
        return [info for _, info in active] + idle
