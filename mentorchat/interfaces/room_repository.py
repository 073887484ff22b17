"""
Room repository interface.

Defines the contract for mentee/mentor room persistence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from mentorchat.models.room import Room


class IRoomRepository(ABC):
    """Abstract interface for room persistence."""

    @abstractmethod
    async def find_or_create(self, mentee_nickname: str, mentor_nickname: str) -> Room:
        """
        Get the room of a mentee/mentor pair, creating it if missing.

        Concurrent callers for the same pair must end up with the same room.

        Args:
            mentee_nickname: Mentee nickname
            mentor_nickname: Mentor nickname

        Returns:
            Room
        """
        pass

    @abstractmethod
    async def get(self, room_id: str) -> Optional[Room]:
        """Get a room by ID."""
        pass

    @abstractmethod
    async def find_mentor(self, room_id: str, mentee_nickname: str) -> Optional[str]:
        """
        Resolve the mentor nickname of a room.

        Args:
            room_id: Room ID
            mentee_nickname: Mentee nickname the room must belong to

        Returns:
            Mentor nickname, or None if no such room
        """
        pass

    @abstractmethod
    async def list_for_mentee(self, mentee_nickname: str) -> list[Room]:
        """List rooms a mentee participates in."""
        pass

    @abstractmethod
    async def list_for_mentor(self, mentor_nickname: str) -> list[Room]:
        """List rooms a mentor participates in."""
        pass
