"""
SQLite implementation of Message repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from mentorchat.core.exceptions import PersistenceError
from mentorchat.core.logger import logger
from mentorchat.infrastructure.local.database import ChatMessageORM, get_session_factory
from mentorchat.interfaces.message_repository import IMessageRepository
from mentorchat.models.chat_message import ChatMessage, ChatMessageCreate, SummaryRecord
from mentorchat.models.enums import MessageType, SenderType


class SqliteMessageRepository(IMessageRepository):
    """SQLite implementation of message repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: ChatMessageORM) -> ChatMessage:
        """Convert ORM object to Pydantic model."""
        message_list = None
        if orm.message_list is not None:
            message_list = [SummaryRecord.model_validate(item) for item in orm.message_list]
        return ChatMessage(
            id=orm.id,
            room_id=orm.room_id,
            sender_type=SenderType(orm.sender_type),
            sender_nickname=orm.sender_nickname,
            message=orm.message,
            message_list=message_list,
            message_type=MessageType(orm.message_type),
            time=orm.time,
            in_response_to=orm.in_response_to,
        )

    async def _insert(self, message: ChatMessageCreate) -> ChatMessage:
        message_list = None
        if message.message_list is not None:
            message_list = [record.model_dump() for record in message.message_list]

        async with self._session_factory() as session:
            orm = ChatMessageORM(
                room_id=message.room_id,
                sender_type=message.sender_type.value,
                sender_nickname=message.sender_nickname,
                message=message.message,
                message_list=message_list,
                message_type=message.message_type.value,
                time=message.time,
                in_response_to=message.in_response_to,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def _find_welcome(self, room_id: str) -> Optional[ChatMessage]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ChatMessageORM).where(
                    ChatMessageORM.room_id == room_id,
                    ChatMessageORM.message_type == MessageType.ENTER.value,
                )
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def save(self, message: ChatMessageCreate) -> ChatMessage:
        """Persist a chat message."""
        try:
            return await self._insert(message)
        except SQLAlchemyError as e:
            logger.error(f"Failed to save {message.message_type.value} message in room {message.room_id}: {e}")
            raise PersistenceError("Failed to save chat message") from e

    async def save_welcome(self, message: ChatMessageCreate) -> ChatMessage:
        """Persist the ENTER message of a room, or return the one already stored."""
        try:
            try:
                return await self._insert(message)
            except IntegrityError:
                # Another entry stored the welcome first (uq_chat_messages_room_welcome)
                existing = await self._find_welcome(message.room_id)
                if existing is None:
                    raise
                return existing
        except SQLAlchemyError as e:
            logger.error(f"Failed to save welcome message in room {message.room_id}: {e}")
            raise PersistenceError("Failed to save welcome message") from e

    async def query_by_room(
        self,
        room_id: str,
        limit: int = 10,
        offset: int = 0,
    ) -> list[ChatMessage]:
        """List messages of a room, most recent first."""
        try:
            async with self._session_factory() as session:
                query = (
                    select(ChatMessageORM)
                    .where(ChatMessageORM.room_id == room_id)
                    .order_by(ChatMessageORM.time.desc(), ChatMessageORM.id.desc())
                    .limit(limit)
                    .offset(offset)
                )
                result = await session.execute(query)
                return [self._orm_to_model(orm) for orm in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Failed to query messages of room {room_id}: {e}")
            raise PersistenceError("Failed to load chat messages") from e

    async def latest_for_room(self, room_id: str) -> Optional[ChatMessage]:
        """Get the most recent message of a room."""
        messages = await self.query_by_room(room_id, limit=1)
        return messages[0] if messages else None
