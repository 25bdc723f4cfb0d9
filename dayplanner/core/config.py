"""
Application configuration using Pydantic Settings.

Engine defaults can be overridden through environment variables or a local .env file.
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
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Logging
    # ===========================================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ===========================================
    # Scheduling window
    # ===========================================
    # IANA timezone name; naive datetimes passed to the engine are read in this zone
    TIMEZONE: str = "UTC"
    DAY_START: str = "06:00"
    DAY_END: str = "23:00"
    SLOT_MINUTES: int = Field(30, ge=5, le=240)

    # ===========================================
    # Breaks
    # ===========================================
    SHORT_BREAK_MINUTES: int = Field(15, ge=1)
    LONG_BREAK_MINUTES: int = Field(30, ge=1)
    MAX_CONTINUOUS_WORK_MINUTES: int = Field(90, ge=1)
    LONG_BREAK_THRESHOLD_MINUTES: int = Field(180, ge=1)
    # A natural gap longer than this between two tasks counts as rest
    LONG_GAP_MINUTES: int = Field(60, ge=0)
    REST_BREAK_MINUTES: int = Field(10, ge=1)
    REST_BETWEEN_INTENSE_TASKS: bool = False


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
