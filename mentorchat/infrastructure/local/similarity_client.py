"""
HTTP implementation of the similarity client.

Posts the question and its summary to the retrieval service and reads back
a JSON list of similar prior Q&A pairs.
"""

from typing import Optional

import httpx
from pydantic import ValidationError

from mentorchat.core.config import get_settings
from mentorchat.core.logger import logger
from mentorchat.interfaces.similarity_client import ISimilarityClient
from mentorchat.models.chat_message import SummaryRecord
from mentorchat.models.upstream import SimilarityRequest, UpstreamResult


class HttpSimilarityClient(ISimilarityClient):
    """Similarity service client over a pooled httpx.AsyncClient."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        path: Optional[str] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self._base_url = (base_url or settings.SIMILARITY_API_BASE).rstrip("/")
        self._path = path or settings.SIMILARITY_PATH
        self._timeout = httpx.Timeout(
            timeout or settings.SIMILARITY_TIMEOUT_SECONDS,
            connect=connect_timeout or settings.SIMILARITY_CONNECT_TIMEOUT_SECONDS,
        )
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def find_similar(
        self,
        request: SimilarityRequest,
    ) -> UpstreamResult[list[SummaryRecord]]:
        """Find prior conversations similar to the request."""
        try:
            response = await self._get_client().post(self._path, json=request.model_dump())
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            logger.warning(f"Similarity service timed out: {e}")
            return UpstreamResult.timeout("Similarity service timed out")
        except httpx.HTTPStatusError as e:
            logger.warning(f"Similarity service returned {e.response.status_code}")
            return UpstreamResult.failure(f"Similarity service returned {e.response.status_code}")
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Similarity request failed: {e}")
            return UpstreamResult.failure(f"Similarity request failed: {type(e).__name__}")

        if payload is None:
            return UpstreamResult.success([])
        if not isinstance(payload, list):
            return UpstreamResult.failure("Similarity service returned a non-list payload")

        try:
            records = [SummaryRecord.model_validate(item) for item in payload]
        except ValidationError as e:
            logger.warning(f"Similarity payload did not validate: {e}")
            return UpstreamResult.failure("Similarity service returned malformed records")
        return UpstreamResult.success(records)

    async def close(self) -> None:
        """Close the pooled HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
