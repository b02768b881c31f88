"""
Application configuration using pydantic-settings.

Loads configuration from environment variables and .env files.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Collaborator functions (question generation, evaluation, summary)
    functions_base_url: str = Field(
        default="http://localhost:54321/functions/v1",
        description="Base URL the collaborator functions are served under",
    )
    functions_api_key: str | None = Field(
        default=None,
        description="Bearer token sent with every collaborator call",
    )
    functions_timeout: int = Field(
        default=60,
        description="Timeout in seconds for collaborator requests",
    )

    # Persistence
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/interviews.db",
        description="SQLAlchemy async connection string for the results store",
    )
    persist_results: bool = Field(
        default=True,
        description="Write candidate records and responses to the database",
    )

    # Interview pacing
    tick_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Wall-clock seconds per countdown time unit",
    )
    expected_question_count: int = Field(
        default=6,
        ge=1,
        description="Number of questions announced to the candidate up front",
    )

    # Application
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
