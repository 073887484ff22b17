"""
Unit tests for the HTTP similarity client, using httpx.MockTransport.
"""

import json

import httpx
import pytest

from mentorchat.core.exceptions import ErrorKind
from mentorchat.infrastructure.local.similarity_client import HttpSimilarityClient
from mentorchat.models.upstream import SimilarityRequest

REQUEST = SimilarityRequest(
    mentor_nickname="test_mentor_1",
    mentee_nickname="test_mentee_1",
    origin_message="How do I learn Go?",
    three_line_summary_message="Wants to learn Go.",
)


def _client(handler) -> HttpSimilarityClient:
    return HttpSimilarityClient(
        base_url="http://similarity.test",
        path="/api/chat/flask",
        timeout=1.0,
        connect_timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_posts_question_and_summary():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=[])

    client = _client(handler)
    await client.find_similar(REQUEST)
    await client.close()

    assert seen["method"] == "POST"
    assert seen["path"] == "/api/chat/flask"
    assert seen["body"] == {
        "mentor_nickname": "test_mentor_1",
        "mentee_nickname": "test_mentee_1",
        "origin_message": "How do I learn Go?",
        "three_line_summary_message": "Wants to learn Go.",
    }


@pytest.mark.asyncio
async def test_parses_service_field_names():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[
                {
                    "question_origin": "Where do I start with Go?",
                    "question_summary": "Starting Go",
                    "answer": "Take the Go tour.",
                    "similarity": 0.92,
                    "room_id": "room_a",
                },
                {
                    "summarized_question": "Go books",
                    "matched_answer": "The Go Programming Language.",
                },
            ],
        )

    client = _client(handler)
    result = await client.find_similar(REQUEST)
    await client.close()

    assert result.ok
    first, second = result.value
    assert first.original_question == "Where do I start with Go?"
    assert first.summarized_question == "Starting Go"
    assert first.matched_answer == "Take the Go tour."
    assert first.similarity == pytest.approx(0.92)
    assert first.source_room_id == "room_a"
    assert second.original_question is None
    assert second.matched_answer == "The Go Programming Language."


@pytest.mark.asyncio
async def test_empty_list_is_success():
    client = _client(lambda request: httpx.Response(200, json=[]))
    result = await client.find_similar(REQUEST)

    assert result.ok
    assert result.value == []


@pytest.mark.asyncio
async def test_null_body_is_empty_success():
    client = _client(lambda request: httpx.Response(200, content=b"null"))
    result = await client.find_similar(REQUEST)

    assert result.ok
    assert result.value == []


@pytest.mark.asyncio
async def test_server_error_is_failure():
    client = _client(lambda request: httpx.Response(500, text="boom"))
    result = await client.find_similar(REQUEST)

    assert not result.ok
    assert result.error == ErrorKind.UPSTREAM_ERROR
    assert "500" in result.detail


@pytest.mark.asyncio
async def test_read_timeout_is_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = _client(handler)
    result = await client.find_similar(REQUEST)

    assert result.error == ErrorKind.UPSTREAM_TIMEOUT


@pytest.mark.asyncio
async def test_connection_error_is_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = _client(handler)
    result = await client.find_similar(REQUEST)

    assert result.error == ErrorKind.UPSTREAM_ERROR


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    [
        b"not json",
        b'{"answer": "an object, not a list"}',
        b'[{"similarity": 0.5}]',
    ],
)
async def test_malformed_payload_is_failure(content):
    client = _client(lambda request: httpx.Response(200, content=content))
    result = await client.find_similar(REQUEST)

    assert result.error == ErrorKind.UPSTREAM_ERROR


@pytest.mark.asyncio
async def test_client_reopens_after_close():
    client = _client(lambda request: httpx.Response(200, json=[]))
    await client.find_similar(REQUEST)
    await client.close()

    result = await client.find_similar(REQUEST)

    assert result.ok
    await client.close()
