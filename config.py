"""
Configuration settings for QuizDeck.

Uses Pydantic Settings for environment variable management with .env file support.
Every setting can be overridden with a QUIZDECK_ prefixed variable, e.g.
QUIZDECK_HISTORY_PATH=/tmp/history.json.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="QUIZDECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # History
    # ========================================
    history_path: Path = Field(
        default=Path.home() / ".quizdeck" / "history.json",
        description="JSON file holding finished-session summaries",
    )
    history_limit: int = Field(
        default=30,
        ge=1,
        description="Maximum number of history records kept (oldest evicted)",
    )
    date_format: str = Field(
        default="%d.%m.%Y, %H:%M:%S",
        description="strftime format for history record dates",
    )

    # ========================================
    # Session
    # ========================================
    session_size: int = Field(
        default=10,
        ge=1,
        description="Questions sampled per session (fewer if the tier is smaller)",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Minimum level written to stderr",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
