"""
Application Configuration

This module provides type-safe configuration loading using Pydantic settings.
Environment variables are loaded from .env file and validated. Range presets
and streak milestones can additionally be tuned in config/default.yaml.

Usage:
    from nitya.config import settings

    # Access settings
    high = settings.PRODUCTIVITY_HIGH_THRESHOLD
    cap = settings.DEFAULT_MAX_HOURS
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Nitya Analytics"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Productivity rating buckets (1-3: Low, 4-6: Medium, 7-10: High)
    PRODUCTIVITY_HIGH_THRESHOLD: int = 7
    PRODUCTIVITY_MEDIUM_THRESHOLD: int = 4

    # Hours buckets, as a fraction of the daily cap
    HOURS_HIGH_RATIO: float = 0.8
    HOURS_MEDIUM_RATIO: float = 0.4
    # Cap used for hours buckets when the productivity criterion is active
    DEFAULT_MAX_HOURS: int = 8

    # Date ranges
    DEFAULT_PRESET: str = "lastweek"

    # Streaks
    STREAK_MILESTONES: list[int] = [3, 7, 14, 30, 60, 100]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()


@lru_cache()
def load_yaml_config() -> dict[str, Any]:
    """Load application configuration from config/default.yaml."""
    config_path = Path(__file__).parent.parent.parent.parent / "config" / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


yaml_config: dict[str, Any] = load_yaml_config()
