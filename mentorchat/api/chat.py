"""
Chat API endpoints.

Room entry, room listing, history pages, message sending and the per-room
event stream.
"""

import asyncio
from typing import AsyncGenerator

from fastapi import APIRouter, Query, Request, Response
from fastapi.responses import StreamingResponse

from mentorchat.api.deps import Orchestrator, Realtime, RoomSessions
from mentorchat.core.exceptions import ErrorCode, ValidationError
from mentorchat.core.logger import logger
from mentorchat.models.chat_message import MessageRequest, MessageResponse
from mentorchat.models.enums import MessageType, SenderType
from mentorchat.models.response import ApiResponse, SuccessCode
from mentorchat.models.room import EnterRoomRequest, EnterRoomResponse, RoomInfo

router = APIRouter()


async def _publish(realtime, room_id: str, payload: ApiResponse) -> None:
    listeners = await realtime.publish(room_id, payload.model_dump(mode="json"))
    logger.debug(f"Published to {listeners} listener(s) of room {room_id}")


@router.post("/room/enter", response_model=ApiResponse[EnterRoomResponse])
async def enter_room(
    request: EnterRoomRequest,
    response: Response,
    sessions: RoomSessions,
    realtime: Realtime,
):
    result = await sessions.enter_room(request.mentee_nickname, request.mentor_nickname)
    code = sessions.success_code(result)
    payload = ApiResponse.success(code, EnterRoomResponse.from_result(result))

    await _publish(realtime, result.room.room_id, payload)
    response.status_code = code.status_code
    return payload


@router.get("/rooms", response_model=ApiResponse[list[RoomInfo]])
async def list_rooms(
    sessions: RoomSessions,
    nickname: str = Query(..., min_length=1),
    type: str = Query(..., description="MENTEE or MENTOR"),
):
    rooms = await sessions.list_rooms(nickname, type)
    if not rooms:
        return ApiResponse.success(SuccessCode.GET_ROOMS_AND_NOT_EXISTS, rooms)
    return ApiResponse.success(SuccessCode.GET_ROOMS_AVAILABLE, rooms)


@router.get("/room/{room_id}/messages", response_model=ApiResponse[list[MessageResponse]])
async def get_history(
    room_id: str,
    sessions: RoomSessions,
    page: int = Query(1),
    size: int = Query(10),
):
    messages = await sessions.get_history(room_id, page=page, size=size)
    return ApiResponse.success(SuccessCode.MESSAGE_LOAD_SUCCESS, messages)


@router.post("/room/{room_id}/messages", response_model=ApiResponse[MessageResponse])
async def send_message(
    room_id: str,
    request: MessageRequest,
    response: Response,
    orchestrator: Orchestrator,
    realtime: Realtime,
):
    if request.message_type == MessageType.TALK:
        saved = await orchestrator.post_message(room_id, request)
        payload = ApiResponse.success(SuccessCode.MESSAGE_SEND_SUCCESS, MessageResponse.from_message(saved))
        await _publish(realtime, room_id, payload)
        response.status_code = SuccessCode.MESSAGE_SEND_SUCCESS.status_code
        return payload

    if request.message_type != MessageType.QUESTION or request.sender_type != SenderType.MENTEE:
        raise ValidationError(
            f"Message type {request.message_type.value} from {request.sender_type.value} is not accepted",
            code=ErrorCode.MESSAGE_TYPE_NOT_ALLOWED,
        )

    answer = await orchestrator.handle_question(
        room_id=room_id,
        sender_nickname=request.sender_nickname,
        question_text=request.message,
        sent_at=request.time,
    )
    payload = ApiResponse.success(SuccessCode.AI_RESPONSE_CREATED, MessageResponse.from_message(answer))
    await _publish(realtime, room_id, payload)
    response.status_code = SuccessCode.AI_RESPONSE_CREATED.status_code
    return payload


@router.get("/room/{room_id}/stream")
async def stream_room(
    room_id: str,
    request: Request,
    realtime: Realtime,
) -> StreamingResponse:
    queue = await realtime.connect(room_id)

    async def event_generator() -> AsyncGenerator[str, None]:
        try:
            yield 'data: {"type":"connected"}\n\n'
            while True:
                if await request.is_disconnected():
                    break
                try:
                    data = await asyncio.wait_for(queue.get(), timeout=15)
                except asyncio.TimeoutError:
                    yield ": keep-alive\n\n"
                    continue
                yield f"data: {data}\n\n"
        finally:
            await realtime.disconnect(room_id, queue)

    return StreamingResponse(event_generator(), media_type="text/event-stream")
