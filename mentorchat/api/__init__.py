"""API routers."""

from mentorchat.api import chat

__all__ = [
    "chat",
]
