"""
Question Orchestrator.

Turns a mentee question into a persisted QUESTION record, a summary from the
language model, a list of similar prior Q&A pairs and one persisted
AI_RESPONSE message.
"""

from __future__ import annotations

from datetime import datetime

from mentorchat.core.exceptions import (
    ErrorKind,
    NotFoundError,
    UpstreamError,
    UpstreamTimeoutError,
    ValidationError,
)
from mentorchat.core.logger import logger
from mentorchat.interfaces.message_repository import IMessageRepository
from mentorchat.interfaces.room_repository import IRoomRepository
from mentorchat.interfaces.similarity_client import ISimilarityClient
from mentorchat.interfaces.summarizer_client import ISummarizerClient
from mentorchat.models.chat_message import ChatMessage, ChatMessageCreate, MessageRequest
from mentorchat.models.enums import MessageType, SenderType
from mentorchat.models.upstream import SimilarityRequest, UpstreamResult
from mentorchat.utils.datetime_utils import now_server, parse_wire_time


def parse_sent_at(sent_at: str) -> datetime:
    """
    Parse a client timestamp.

    Raises:
        ValidationError: TIME_INPUT_INVALID when the format does not match
    """
    try:
        return parse_wire_time(sent_at)
    except ValueError as e:
        logger.warning(f"Rejected timestamp {sent_at!r}: {e}")
        raise ValidationError(f"Invalid timestamp: {sent_at!r}") from e


def _raise_for_upstream(result: UpstreamResult, stage: str) -> None:
    if result.ok:
        return
    if result.error == ErrorKind.UPSTREAM_TIMEOUT:
        raise UpstreamTimeoutError(f"{stage} timed out", details=result.detail)
    raise UpstreamError(f"{stage} failed", details=result.detail)


class QuestionOrchestrator:
    """Pipeline controller for chat messages and questions."""

    def __init__(
        self,
        room_repo: IRoomRepository,
        message_repo: IMessageRepository,
        summarizer: ISummarizerClient,
        similarity: ISimilarityClient,
    ):
        self._room_repo = room_repo
        self._message_repo = message_repo
        self._summarizer = summarizer
        self._similarity = similarity

    async def post_message(self, room_id: str, request: MessageRequest) -> ChatMessage:
        """
        Persist an ordinary chat message.

        Raises:
            ValidationError: If request.time is malformed
            NotFoundError: If the room does not exist
            PersistenceError: If the write fails
        """
        sent_at = parse_sent_at(request.time)
        if await self._room_repo.get(room_id) is None:
            raise NotFoundError(f"Room {room_id} not found")

        return await self._message_repo.save(
            ChatMessageCreate(
                room_id=room_id,
                sender_type=request.sender_type,
                sender_nickname=request.sender_nickname,
                message=request.message,
                message_type=request.message_type,
                time=sent_at,
            )
        )

    async def handle_question(
        self,
        room_id: str,
        sender_nickname: str,
        question_text: str,
        sent_at: str,
    ) -> ChatMessage:
        """
        Run the question pipeline.

        Steps: validate time, resolve the mentor, persist the QUESTION,
        summarize, look up similar Q&A pairs, persist the AI_RESPONSE.
        Summary and similarity run one after the other since the lookup
        needs the summary. A failure after the QUESTION write leaves that
        record in place; nothing is rolled back or retried.

        Args:
            room_id: Room ID
            sender_nickname: Mentee nickname
            question_text: Question as asked
            sent_at: Client timestamp, "yyyy-MM-dd HH:mm:ss"

        Returns:
            The persisted AI_RESPONSE message, linked to its QUESTION via
            in_response_to

        Raises:
            ValidationError: Malformed timestamp (no writes)
            NotFoundError: No mentor for (room_id, sender_nickname) (no writes)
            PersistenceError: QUESTION or AI_RESPONSE write failed
            UpstreamTimeoutError: Summarizer or similarity call timed out
            UpstreamError: Summarizer or similarity call failed
        """
        asked_at = parse_sent_at(sent_at)

        mentor_nickname = await self._room_repo.find_mentor(room_id, sender_nickname)
        if mentor_nickname is None:
            logger.error(f"No mentor for room {room_id} and mentee {sender_nickname}")
            raise NotFoundError(f"No mentor for room {room_id}")

        question = await self._message_repo.save(
            ChatMessageCreate(
                room_id=room_id,
                sender_type=SenderType.MENTEE,
                sender_nickname=sender_nickname,
                message=question_text,
                message_type=MessageType.QUESTION,
                time=asked_at,
            )
        )
        logger.info(f"Stored question {question.id} in room {room_id}")

        summary = await self._summarizer.summarize(question_text)
        _raise_for_upstream(summary, "Summarizer")

        matches = await self._similarity.find_similar(
            SimilarityRequest(
                mentor_nickname=mentor_nickname,
                mentee_nickname=sender_nickname,
                origin_message=question_text,
                three_line_summary_message=summary.value,
            )
        )
        _raise_for_upstream(matches, "Similarity lookup")
        records = matches.value or []
        if not records:
            logger.info(f"No similar conversations for question {question.id}")

        response = await self._message_repo.save(
            ChatMessageCreate(
                room_id=room_id,
                sender_type=SenderType.MENTOR,
                sender_nickname=mentor_nickname,
                message_list=records,
                message_type=MessageType.AI_RESPONSE,
                time=now_server(),
                in_response_to=question.id,
            )
        )
        logger.info(
            f"Stored AI response {response.id} for question {question.id} "
            f"with {len(records)} matches"
        )
        return response
