"""
Summarizer client interface.

Condenses a mentee question with a language model.
Implementations: LiteLLM, Gemini API.
"""

from abc import ABC, abstractmethod

from mentorchat.models.upstream import UpstreamResult


class ISummarizerClient(ABC):
    """Abstract interface for question summarizers."""

    @abstractmethod
    async def summarize(self, question_text: str) -> UpstreamResult[str]:
        """
        Summarize a question.

        Single attempt, bounded by the configured timeout.

        Args:
            question_text: Question as asked by the mentee

        Returns:
            UpstreamResult holding the summary text, or the failure kind
        """
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """
        Get the human-readable model name.

        Returns:
            Model name string for logging/display
        """
        pass
