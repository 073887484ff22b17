"""Abstract interfaces for infrastructure abstraction."""

from mentorchat.interfaces.message_repository import IMessageRepository
from mentorchat.interfaces.room_repository import IRoomRepository
from mentorchat.interfaces.similarity_client import ISimilarityClient
from mentorchat.interfaces.summarizer_client import ISummarizerClient

__all__ = [
    "IMessageRepository",
    "IRoomRepository",
    "ISimilarityClient",
    "ISummarizerClient",
]
