"""
Configuration settings for the Listing Search Assistant.
"""

from typing import Literal
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys
    OPENAI_API_KEY: str = ""

    # OpenAI Model Settings
    OPENAI_MODEL: str = "gpt-4"
    OPENAI_EMBEDDING_MODEL: str = "text-embedding-ada-002"
    OPENAI_TEMPERATURE: float = 0.0

    # Hosted assistant used for non-search questions
    OPENAI_ASSISTANT_ID: str = ""
    ASSISTANT_POLL_INTERVAL: float = 2.0  # seconds between run status checks
    ASSISTANT_MAX_POLLS: int = 30

    # Listing store (Supabase / PostgREST)
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""
    SUPABASE_TIMEOUT: float = 15.0

    # Search Settings
    MATCH_COUNT: int = 3
    MATCH_THRESHOLD: float = 0.8

    # "summarize": max 4 sentences + translation, "translate": translation only
    LOCALIZATION_MODE: Literal["summarize", "translate"] = "summarize"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
