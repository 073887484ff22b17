"""
Similarity client interface.

Retrieves prior Q&A pairs similar to a new question.
"""

from abc import ABC, abstractmethod

from mentorchat.models.chat_message import SummaryRecord
from mentorchat.models.upstream import SimilarityRequest, UpstreamResult


class ISimilarityClient(ABC):
    """Abstract interface for the similarity service."""

    @abstractmethod
    async def find_similar(
        self,
        request: SimilarityRequest,
    ) -> UpstreamResult[list[SummaryRecord]]:
        """
        Find prior conversations similar to the request.

        An empty list is a valid, non-error result.

        Args:
            request: Question, summary and participant nicknames

        Returns:
            UpstreamResult holding matched records, or the failure kind
        """
        pass

    async def close(self) -> None:
        """Release pooled connections. Default implementation does nothing."""
        return None
