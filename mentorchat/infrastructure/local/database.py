"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
"""

from functools import lru_cache
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from mentorchat.core.config import get_settings
from mentorchat.utils.datetime_utils import now_server


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class RoomORM(Base):
    """Room ORM model."""

    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("mentee_nickname", "mentor_nickname", name="uq_rooms_pair"),
    )

    room_id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    mentee_nickname = Column(String(100), nullable=False, index=True)
    mentor_nickname = Column(String(100), nullable=False, index=True)
    created_at = Column(DateTime, default=now_server)


class ChatMessageORM(Base):
    """Chat message ORM model."""

    __tablename__ = "chat_messages"
    # AUTOINCREMENT keeps ids strictly increasing (never reused); one ENTER per room
    __table_args__ = (
        Index("ix_chat_messages_room_time_id", "room_id", "time", "id"),
        Index(
            "uq_chat_messages_room_welcome",
            "room_id",
            unique=True,
            sqlite_where=text("message_type = 'ENTER'"),
        ),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    room_id = Column(String(36), nullable=False, index=True)
    sender_type = Column(String(10), nullable=False)
    sender_nickname = Column(String(100), nullable=False)
    message = Column(Text, nullable=True)
    message_list = Column(JSON, nullable=True)
    message_type = Column(String(20), nullable=False, index=True)
    time = Column(DateTime, nullable=False)
    in_response_to = Column(Integer, nullable=True)


# ===========================================
# Engine / Session
# ===========================================


@lru_cache()
def get_engine():
    """Get the pooled async engine (one per process)."""
    settings = get_settings()
    connect_args = {}
    if settings.DATABASE_URL.startswith("sqlite"):
        connect_args["timeout"] = settings.DATABASE_TIMEOUT_SECONDS
    return create_async_engine(
        settings.DATABASE_URL,
        echo=False,
        connect_args=connect_args,
    )


def get_session_factory():
    """Get async session factory."""
    engine = get_engine()
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db():
    """Initialize database tables."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_db():
    """Close pooled connections."""
    await get_engine().dispose()
