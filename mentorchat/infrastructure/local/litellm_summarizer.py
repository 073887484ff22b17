"""
LiteLLM summarizer implementation.

Supports OpenAI, Bedrock, and other providers via LiteLLM.
Includes support for custom endpoints (api_base) for proxy servers.
"""

import asyncio
from typing import Any, Optional

import litellm

from mentorchat.core.config import get_settings
from mentorchat.core.logger import logger
from mentorchat.interfaces.summarizer_client import ISummarizerClient
from mentorchat.models.upstream import UpstreamResult
from mentorchat.prompts.summary_prompt import SUMMARY_SYSTEM_PROMPT, build_summary_prompt


class LiteLLMSummarizer(ISummarizerClient):
    """Question summarizer backed by LiteLLM."""

    def __init__(
        self,
        model_name: str,
        api_base: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize LiteLLM summarizer.

        Args:
            model_name: LiteLLM model identifier (e.g., "gpt-4o-mini")
            api_base: Custom API endpoint URL (optional, for proxy servers)
            api_key: Custom API key (optional, overrides default)
            timeout: Deadline in seconds for one call
        """
        self._model_name = model_name
        self._settings = get_settings()
        self._api_base = api_base or self._settings.LITELLM_API_BASE or None
        self._api_key = api_key or self._settings.LITELLM_API_KEY or None
        self._timeout = timeout or self._settings.SUMMARIZER_TIMEOUT_SECONDS

    def get_model_name(self) -> str:
        """Get human-readable model name."""
        if self._api_base:
            return f"LiteLLM ({self._model_name} @ {self._api_base})"
        return f"LiteLLM ({self._model_name})"

    async def summarize(self, question_text: str) -> UpstreamResult[str]:
        """Summarize a question with a single bounded call."""
        kwargs: dict[str, Any] = {
            "model": self._model_name,
            "messages": [
                {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
                {"role": "user", "content": build_summary_prompt(question_text)},
            ],
            "temperature": 0.2,
            "max_tokens": self._settings.SUMMARIZER_MAX_OUTPUT_TOKENS,
            "num_retries": 0,
        }
        if self._api_base:
            kwargs["api_base"] = self._api_base
        if self._api_key:
            kwargs["api_key"] = self._api_key

        try:
            response = await asyncio.wait_for(litellm.acompletion(**kwargs), timeout=self._timeout)
        except (asyncio.TimeoutError, litellm.exceptions.Timeout) as e:
            logger.warning(f"Summarizer timed out after {self._timeout}s: {e}")
            return UpstreamResult.timeout(f"{self.get_model_name()} timed out")
        except Exception as e:
            logger.warning(f"Summarizer request failed: {e}")
            return UpstreamResult.failure(f"{self.get_model_name()} failed: {type(e).__name__}")

        content = (response.choices[0].message.content or "").strip()
        if not content:
            return UpstreamResult.failure(f"{self.get_model_name()} returned an empty summary")
        return UpstreamResult.success(content)
