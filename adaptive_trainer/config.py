"""
Configuration settings for the adaptive decision trainer.

Uses Pydantic Settings for environment variable management with .env file support.
Scheduling constants live in adaptive_trainer.drill.scheduler and are not
configurable here.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STATE_DIR = Path.home() / ".adaptive-trainer"
STARTER_PACK_PATH = Path(__file__).parent / "data" / "starter_pack.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ADAPTIVE_TRAINER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Storage
    # ========================================
    state_dir: Path = Field(
        default=DEFAULT_STATE_DIR,
        description="Directory holding the saved session and filter JSON files",
    )
    session_id: str = Field(
        default="adaptive-session",
        description="Identifier given to newly created drill sessions",
    )

    # ========================================
    # Scenario Catalog
    # ========================================
    scenario_pack: Path = Field(
        default=STARTER_PACK_PATH,
        description="JSON scenario pack to drill from",
    )

    # ========================================
    # Drill Player
    # ========================================
    answer_time_limit_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Seconds allowed per scenario before the answer counts as a timeout",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level for the stderr sink",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional log file path (rotated at 10 MB)",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
