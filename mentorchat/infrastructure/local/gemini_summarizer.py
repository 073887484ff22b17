"""
Gemini API summarizer implementation.

Uses Gemini API with API Key (no GCP project required).
"""

import asyncio
from typing import Optional

from google import genai
from google.genai.types import GenerateContentConfig

from mentorchat.core.config import get_settings
from mentorchat.core.logger import logger
from mentorchat.interfaces.summarizer_client import ISummarizerClient
from mentorchat.models.upstream import UpstreamResult
from mentorchat.prompts.summary_prompt import SUMMARY_SYSTEM_PROMPT, build_summary_prompt


class GeminiSummarizer(ISummarizerClient):
    """Question summarizer backed by the Gemini API."""

    def __init__(self, model_name: str, timeout: Optional[float] = None):
        self._model_name = model_name
        self._settings = get_settings()
        self._timeout = timeout or self._settings.SUMMARIZER_TIMEOUT_SECONDS

        if not self._settings.GOOGLE_API_KEY:
            raise ValueError(
                "GOOGLE_API_KEY is required for Gemini API provider. "
                "Get your API key from https://aistudio.google.com/apikey"
            )
        self._client = genai.Client(api_key=self._settings.GOOGLE_API_KEY)

    def get_model_name(self) -> str:
        """Get human-readable model name."""
        return f"Gemini API ({self._model_name})"

    async def summarize(self, question_text: str) -> UpstreamResult[str]:
        """Summarize a question with a single bounded call."""
        config = GenerateContentConfig(
            system_instruction=SUMMARY_SYSTEM_PROMPT,
            temperature=0.2,
            max_output_tokens=self._settings.SUMMARIZER_MAX_OUTPUT_TOKENS,
        )
        try:
            response = await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=self._model_name,
                    contents=build_summary_prompt(question_text),
                    config=config,
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Summarizer timed out after {self._timeout}s")
            return UpstreamResult.timeout(f"{self.get_model_name()} timed out")
        except Exception as e:
            logger.warning(f"GenAI request failed: {e}")
            return UpstreamResult.failure(f"{self.get_model_name()} failed: {type(e).__name__}")

        text = (response.text or "").strip()
        if not text:
            return UpstreamResult.failure(f"{self.get_model_name()} returned an empty summary")
        return UpstreamResult.success(text)
