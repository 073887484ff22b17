"""
Enum definitions for the application.
"""

from enum import Enum


class SenderType(str, Enum):
    """Who sent a chat message."""

    MENTOR = "MENTOR"
    MENTEE = "MENTEE"


class MessageType(str, Enum):
    """
    Kind of chat message.

    ENTER = Welcome message emitted when a room is first opened
    TALK = Ordinary chat line
    QUESTION = Mentee question that triggers the AI pipeline
    AI_RESPONSE = Composite answer holding similar prior Q&A pairs
    """

    ENTER = "ENTER"
    TALK = "TALK"
    QUESTION = "QUESTION"
    AI_RESPONSE = "AI_RESPONSE"
