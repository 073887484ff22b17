"""
SQLite implementation of Room repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import uuid4

from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from mentorchat.core.exceptions import PersistenceError
from mentorchat.core.logger import logger
from mentorchat.infrastructure.local.database import RoomORM, get_session_factory
from mentorchat.interfaces.room_repository import IRoomRepository
from mentorchat.models.room import Room
from mentorchat.utils.datetime_utils import now_server


class SqliteRoomRepository(IRoomRepository):
    """SQLite implementation of room repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: RoomORM) -> Room:
        """Convert ORM object to Pydantic model."""
        return Room(
            room_id=orm.room_id,
            mentee_nickname=orm.mentee_nickname,
            mentor_nickname=orm.mentor_nickname,
            created_at=orm.created_at,
        )

    async def _find_pair(self, mentee_nickname: str, mentor_nickname: str) -> Optional[Room]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(RoomORM).where(
                    and_(
                        RoomORM.mentee_nickname == mentee_nickname,
                        RoomORM.mentor_nickname == mentor_nickname,
                    )
                )
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def find_or_create(self, mentee_nickname: str, mentor_nickname: str) -> Room:
        """Get the room of a mentee/mentor pair, creating it if missing."""
        try:
            existing = await self._find_pair(mentee_nickname, mentor_nickname)
            if existing:
                return existing

            try:
                async with self._session_factory() as session:
                    orm = RoomORM(
                        room_id=str(uuid4()),
                        mentee_nickname=mentee_nickname,
                        mentor_nickname=mentor_nickname,
                        created_at=now_server(),
                    )
                    session.add(orm)
                    await session.commit()
                    await session.refresh(orm)
                    logger.info(f"Created room {orm.room_id} for {mentee_nickname}/{mentor_nickname}")
                    return self._orm_to_model(orm)
            except IntegrityError:
                # Lost the race on uq_rooms_pair; the winner's row is authoritative
                winner = await self._find_pair(mentee_nickname, mentor_nickname)
                if winner is None:
                    raise
                return winner
        except SQLAlchemyError as e:
            logger.error(f"Failed to resolve room for {mentee_nickname}/{mentor_nickname}: {e}")
            raise PersistenceError("Failed to resolve chat room") from e

    async def get(self, room_id: str) -> Optional[Room]:
        """Get a room by ID."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(RoomORM).where(RoomORM.room_id == room_id))
                orm = result.scalar_one_or_none()
                return self._orm_to_model(orm) if orm else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to load room {room_id}: {e}")
            raise PersistenceError("Failed to load chat room") from e

    async def find_mentor(self, room_id: str, mentee_nickname: str) -> Optional[str]:
        """Resolve the mentor nickname of a room."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(RoomORM.mentor_nickname).where(
                        and_(
                            RoomORM.room_id == room_id,
                            RoomORM.mentee_nickname == mentee_nickname,
                        )
                    )
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to resolve mentor of room {room_id}: {e}")
            raise PersistenceError("Failed to resolve mentor") from e

    async def list_for_mentee(self, mentee_nickname: str) -> list[Room]:
        """List rooms a mentee participates in."""
        return await self._list_where(RoomORM.mentee_nickname == mentee_nickname)

    async def list_for_mentor(self, mentor_nickname: str) -> list[Room]:
        """List rooms a mentor participates in."""
        return await self._list_where(RoomORM.mentor_nickname == mentor_nickname)

    async def _list_where(self, condition) -> list[Room]:
        try:
            async with self._session_factory() as session:
                query = select(RoomORM).where(condition).order_by(RoomORM.created_at.asc())
                result = await session.execute(query)
                return [self._orm_to_model(orm) for orm in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list rooms: {e}")
            raise PersistenceError("Failed to list chat rooms") from e
