"""
Message repository interface.

Defines the contract for ordered chat message persistence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from mentorchat.models.chat_message import ChatMessage, ChatMessageCreate


class IMessageRepository(ABC):
    """Abstract interface for chat message persistence."""

    @abstractmethod
    async def save(self, message: ChatMessageCreate) -> ChatMessage:
        """
        Persist a chat message.

        Args:
            message: Message to store

        Returns:
            Stored message with its assigned id

        Raises:
            PersistenceError: If the write fails
        """
        pass

    @abstractmethod
    async def save_welcome(self, message: ChatMessageCreate) -> ChatMessage:
        """
        Persist the ENTER message of a room at most once.

        Concurrent callers for the same room all get the single stored
        welcome back.

        Raises:
            PersistenceError: If the write fails
        """
        pass

    @abstractmethod
    async def query_by_room(
        self,
        room_id: str,
        limit: int = 10,
        offset: int = 0,
    ) -> list[ChatMessage]:
        """
        List messages of a room, most recent first.

        Ordered by (time DESC, id DESC) so equal-second messages always
        resolve in the same relative order.

        Args:
            room_id: Room ID
            limit: Max messages
            offset: Pagination offset

        Returns:
            List of chat messages

        Raises:
            PersistenceError: If the read fails
        """
        pass

    @abstractmethod
    async def latest_for_room(self, room_id: str) -> Optional[ChatMessage]:
        """
        Get the most recent message of a room.

        Returns:
            ChatMessage if the room has any, None otherwise
        """
        pass
