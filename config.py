"""
Configuration settings for DevOps Pathfinder.

Uses Pydantic Settings for environment variable management with .env file support.
All variables are prefixed with PATHFINDER_ (e.g. PATHFINDER_GEMINI_API_KEY).
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PATHFINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # AI Mentor (Gemini)
    # ========================================
    gemini_api_key: str = Field(
        default="",
        description="Google Generative AI (Gemini) API key",
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash-preview-09-2025",
        description="Gemini model used for task guides and scenarios",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Generative Language API",
    )
    request_timeout_seconds: float = Field(
        default=60.0,
        description="Timeout for a single generation request",
    )
    retry_delays_ms: list[int] = Field(
        default_factory=lambda: [1000, 2000, 4000],
        description="Backoff before each retry; its length is the retry budget",
    )

    # ========================================
    # Progress & Content
    # ========================================
    progress_file: Path = Field(
        default=Path.home() / ".pathfinder" / "progress.json",
        description="JSON file holding the checked-off skills",
    )
    catalog_file: Path | None = Field(
        default=None,
        description="Alternative roadmap YAML (defaults to the bundled roadmap)",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Minimum level written to stderr",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("retry_delays_ms")
    @classmethod
    def _non_negative_delays(cls, value: list[int]) -> list[int]:
        if any(delay < 0 for delay in value):
            raise ValueError("retry delays must be non-negative")
        return value

    def get_mentor_config(self) -> dict[str, object]:
        """Get AI mentor configuration as a dictionary."""
        return {
            "model": self.gemini_model,
            "base_url": self.gemini_base_url,
            "timeout_seconds": self.request_timeout_seconds,
            "retry_delays_ms": list(self.retry_delays_ms),
            "api_key_configured": bool(self.gemini_api_key),
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
