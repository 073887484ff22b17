"""
Shared fixtures: in-memory SQLite repositories and message builders.
"""

from datetime import datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mentorchat.infrastructure.local.database import Base
from mentorchat.infrastructure.local.message_repository import SqliteMessageRepository
from mentorchat.infrastructure.local.room_repository import SqliteRoomRepository
from mentorchat.models.chat_message import ChatMessageCreate
from mentorchat.models.enums import MessageType, SenderType

TEST_MENTEE_NICKNAME = "test_mentee_1"
TEST_MENTOR_NICKNAME = "test_mentor_1"
BASE_TIME = datetime(2024, 1, 1, 10, 0, 0)


@pytest.fixture
async def session_factory():
    """Session factory over a fresh in-memory database."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def file_session_factory(tmp_path):
    """Session factory over a file database; connections are not shared."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'chat.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def room_repo(session_factory):
    return SqliteRoomRepository(session_factory=session_factory)


@pytest.fixture
def message_repo(session_factory):
    return SqliteMessageRepository(session_factory=session_factory)


@pytest.fixture
async def room(room_repo):
    """Room of the default mentee/mentor pair."""
    return await room_repo.find_or_create(TEST_MENTEE_NICKNAME, TEST_MENTOR_NICKNAME)


@pytest.fixture
def make_message():
    """Build a ChatMessageCreate; offset_seconds is added to BASE_TIME."""

    def factory(
        room_id: str,
        text: str = "test message",
        offset_seconds: int = 0,
        message_type: MessageType = MessageType.TALK,
        sender_type: SenderType = SenderType.MENTEE,
        sender_nickname: str = TEST_MENTEE_NICKNAME,
    ) -> ChatMessageCreate:
        return ChatMessageCreate(
            room_id=room_id,
            sender_type=sender_type,
            sender_nickname=sender_nickname,
            message=text,
            message_type=message_type,
            time=BASE_TIME + timedelta(seconds=offset_seconds),
        )

    return factory
