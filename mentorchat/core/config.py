"""
Application configuration using Pydantic Settings.

Upstream providers and timeouts are selected through environment variables.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "production"] = "local"
    DEBUG: bool = True

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./mentorchat.db"
    DATABASE_TIMEOUT_SECONDS: float = 5.0

    # ===========================================
    # Summarizer (LLM)
    # ===========================================
    # "litellm" | "gemini-api"
    LLM_PROVIDER: Literal["litellm", "gemini-api"] = "litellm"

    # LiteLLM model identifier (OpenAI, Bedrock, etc.)
    LITELLM_MODEL: str = "gpt-4o-mini"
    LITELLM_API_BASE: str = ""
    LITELLM_API_KEY: str = ""

    # Gemini model name and API key (for gemini-api provider)
    GEMINI_MODEL: str = "gemini-2.0-flash"
    GOOGLE_API_KEY: str = ""

    SUMMARIZER_TIMEOUT_SECONDS: float = 30.0
    SUMMARIZER_MAX_OUTPUT_TOKENS: int = 300

    # ===========================================
    # Similarity service
    # ===========================================
    SIMILARITY_API_BASE: str = "http://localhost:5000"
    SIMILARITY_PATH: str = "/api/chat/flask"
    SIMILARITY_TIMEOUT_SECONDS: float = 30.0
    SIMILARITY_CONNECT_TIMEOUT_SECONDS: float = 5.0

    # ===========================================
    # Chat
    # ===========================================
    # Wire timestamps carry no offset and are read in this zone
    SERVER_TIMEZONE: str = "Asia/Seoul"
    ENTRY_PAGE_SIZE: int = 10

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
