"""
Unit tests for SQLite message repository.

Tests persistence and the (time DESC, id DESC) read order.
"""

from datetime import datetime

import pytest

from mentorchat.core.exceptions import PersistenceError
from mentorchat.models.chat_message import ChatMessageCreate, SummaryRecord
from mentorchat.models.enums import MessageType, SenderType


@pytest.mark.asyncio
async def test_save_assigns_increasing_ids(message_repo, room, make_message):
    first = await message_repo.save(make_message(room.room_id, "one"))
    second = await message_repo.save(make_message(room.room_id, "two"))

    assert first.id is not None
    assert second.id > first.id
    assert second.message == "two"
    assert second.message_type == MessageType.TALK


@pytest.mark.asyncio
async def test_save_truncates_subsecond_time(message_repo, room):
    saved = await message_repo.save(
        ChatMessageCreate(
            room_id=room.room_id,
            sender_type=SenderType.MENTEE,
            sender_nickname="test_mentee_1",
            message="fast",
            message_type=MessageType.TALK,
            time=datetime(2024, 1, 1, 10, 0, 0, 999999),
        )
    )
    assert saved.time == datetime(2024, 1, 1, 10, 0, 0)


@pytest.mark.asyncio
async def test_save_and_load_summary_records(message_repo, room):
    saved = await message_repo.save(
        ChatMessageCreate(
            room_id=room.room_id,
            sender_type=SenderType.MENTOR,
            sender_nickname="test_mentor_1",
            message_list=[
                SummaryRecord(
                    original_question="How do I start with Go?",
                    summarized_question="starting Go",
                    matched_answer="Do the Go tour first.",
                    similarity=0.91,
                    source_room_id="other_room",
                )
            ],
            message_type=MessageType.AI_RESPONSE,
            time=datetime(2024, 1, 1, 10, 0, 1),
            in_response_to=42,
        )
    )

    loaded = (await message_repo.query_by_room(room.room_id))[0]
    assert loaded.id == saved.id
    assert loaded.message is None
    assert loaded.in_response_to == 42
    assert len(loaded.message_list) == 1
    record = loaded.message_list[0]
    assert record.summarized_question == "starting Go"
    assert record.matched_answer == "Do the Go tour first."
    assert record.similarity == pytest.approx(0.91)
    assert record.source_room_id == "other_room"


@pytest.mark.asyncio
async def test_query_orders_by_time_then_id_desc(message_repo, room, make_message):
    late = await message_repo.save(make_message(room.room_id, "late", offset_seconds=60))
    early = await message_repo.save(make_message(room.room_id, "early", offset_seconds=0))
    middle = await message_repo.save(make_message(room.room_id, "middle", offset_seconds=30))

    messages = await message_repo.query_by_room(room.room_id)
    assert [m.id for m in messages] == [late.id, middle.id, early.id]


@pytest.mark.asyncio
async def test_equal_seconds_resolve_by_id_on_every_query(message_repo, room, make_message):
    saved = [
        await message_repo.save(make_message(room.room_id, f"burst {i}", offset_seconds=0))
        for i in range(5)
    ]
    expected = [m.id for m in reversed(saved)]

    for _ in range(3):
        messages = await message_repo.query_by_room(room.room_id)
        assert [m.id for m in messages] == expected


@pytest.mark.asyncio
async def test_query_limit_and_offset(message_repo, room, make_message):
    for i in range(1, 26):
        await message_repo.save(make_message(room.room_id, f"message_{i}", offset_seconds=i))

    first_page = await message_repo.query_by_room(room.room_id, limit=10)
    second_page = await message_repo.query_by_room(room.room_id, limit=10, offset=10)

    assert [m.message for m in first_page] == [f"message_{i}" for i in range(25, 15, -1)]
    assert [m.message for m in second_page] == [f"message_{i}" for i in range(15, 5, -1)]


@pytest.mark.asyncio
async def test_query_is_scoped_to_room(message_repo, room_repo, room, make_message):
    other = await room_repo.find_or_create("someone_else", "test_mentor_1")
    await message_repo.save(make_message(room.room_id, "mine"))
    await message_repo.save(make_message(other.room_id, "theirs"))

    messages = await message_repo.query_by_room(room.room_id)
    assert [m.message for m in messages] == ["mine"]


@pytest.mark.asyncio
async def test_latest_for_room(message_repo, room, make_message):
    assert await message_repo.latest_for_room(room.room_id) is None

    await message_repo.save(make_message(room.room_id, "old", offset_seconds=0))
    await message_repo.save(make_message(room.room_id, "new", offset_seconds=10))

    latest = await message_repo.latest_for_room(room.room_id)
    assert latest.message == "new"


@pytest.mark.asyncio
async def test_save_welcome_stores_one_enter_per_room(message_repo, room, make_message):
    def welcome(text):
        return make_message(
            room.room_id,
            text,
            message_type=MessageType.ENTER,
            sender_type=SenderType.MENTOR,
            sender_nickname="test_mentor_1",
        )

    first = await message_repo.save_welcome(welcome("Hello!"))
    second = await message_repo.save_welcome(welcome("Hello again!"))

    assert second.id == first.id
    assert second.message == "Hello!"
    assert [m.id for m in await message_repo.query_by_room(room.room_id)] == [first.id]


@pytest.mark.asyncio
async def test_plain_save_rejects_second_enter(message_repo, room, make_message):
    await message_repo.save(make_message(room.room_id, "Hello!", message_type=MessageType.ENTER))

    with pytest.raises(PersistenceError):
        await message_repo.save(make_message(room.room_id, "Hello again!", message_type=MessageType.ENTER))

    # Other message types are unaffected
    await message_repo.save(make_message(room.room_id, "talk"))
    assert len(await message_repo.query_by_room(room.room_id)) == 2
