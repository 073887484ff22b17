"""
Upstream call models.

Summarizer and similarity clients return typed results instead of raising.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from mentorchat.core.exceptions import ErrorKind

T = TypeVar("T")


class SimilarityRequest(BaseModel):
    """Payload sent to the similarity service."""

    mentor_nickname: str
    mentee_nickname: str
    origin_message: str = Field(..., description="Question as asked")
    three_line_summary_message: str = Field(..., description="Summarizer output")


@dataclass(frozen=True)
class UpstreamResult(Generic[T]):
    """Result of one external call: a value or a failure kind."""

    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "UpstreamResult[T]":
        return cls(value=value)

    @classmethod
    def timeout(cls, detail: str) -> "UpstreamResult[T]":
        return cls(error=ErrorKind.UPSTREAM_TIMEOUT, detail=detail)

    @classmethod
    def failure(cls, detail: str) -> "UpstreamResult[T]":
        return cls(error=ErrorKind.UPSTREAM_ERROR, detail=detail)
