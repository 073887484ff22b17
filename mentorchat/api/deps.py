"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from mentorchat.core.config import get_settings
from mentorchat.interfaces.message_repository import IMessageRepository
from mentorchat.interfaces.room_repository import IRoomRepository
from mentorchat.interfaces.similarity_client import ISimilarityClient
from mentorchat.interfaces.summarizer_client import ISummarizerClient
from mentorchat.services.question_orchestrator import QuestionOrchestrator
from mentorchat.services.realtime_service import RealtimeManager, realtime_manager
from mentorchat.services.room_session_service import RoomSessionManager


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_room_repository() -> IRoomRepository:
    """Get room repository instance."""
    from mentorchat.infrastructure.local.room_repository import SqliteRoomRepository

    return SqliteRoomRepository()


@lru_cache()
def get_message_repository() -> IMessageRepository:
    """Get message repository instance."""
    from mentorchat.infrastructure.local.message_repository import SqliteMessageRepository

    return SqliteMessageRepository()


# ===========================================
# Upstream Client Dependencies
# ===========================================


@lru_cache()
def get_summarizer_client() -> ISummarizerClient:
    """Get summarizer instance based on LLM_PROVIDER."""
    settings = get_settings()
    if settings.LLM_PROVIDER == "gemini-api":
        from mentorchat.infrastructure.local.gemini_summarizer import GeminiSummarizer

        return GeminiSummarizer(model_name=settings.GEMINI_MODEL)

    from mentorchat.infrastructure.local.litellm_summarizer import LiteLLMSummarizer

    return LiteLLMSummarizer(model_name=settings.LITELLM_MODEL)


@lru_cache()
def get_similarity_client() -> ISimilarityClient:
    """Get similarity client instance (one pooled HTTP client per process)."""
    from mentorchat.infrastructure.local.similarity_client import HttpSimilarityClient

    return HttpSimilarityClient()


def get_realtime_manager() -> RealtimeManager:
    """Get the room fan-out manager."""
    return realtime_manager


# ===========================================
# Service Dependencies
# ===========================================


def get_room_session_manager(
    room_repo: IRoomRepository = Depends(get_room_repository),
    message_repo: IMessageRepository = Depends(get_message_repository),
) -> RoomSessionManager:
    """Get room session manager."""
    return RoomSessionManager(room_repo, message_repo)


def get_question_orchestrator(
    room_repo: IRoomRepository = Depends(get_room_repository),
    message_repo: IMessageRepository = Depends(get_message_repository),
    summarizer: ISummarizerClient = Depends(get_summarizer_client),
    similarity: ISimilarityClient = Depends(get_similarity_client),
) -> QuestionOrchestrator:
    """Get question orchestrator."""
    return QuestionOrchestrator(room_repo, message_repo, summarizer, similarity)


# Type aliases for cleaner dependency injection
Realtime = Annotated[RealtimeManager, Depends(get_realtime_manager)]
RoomSessions = Annotated[RoomSessionManager, Depends(get_room_session_manager)]
Orchestrator = Annotated[QuestionOrchestrator, Depends(get_question_orchestrator)]
