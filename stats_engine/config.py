"""Configuration management using Pydantic Settings.

This module provides centralized configuration for the stats engine,
supporting environment variables and .env file loading.

Example:
    >>> from stats_engine.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.goal_tolerance_pct)
    0.1
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Environment variables take precedence over .env file values.

    Attributes:
        goal_tolerance_pct: Width of the at_risk band for gte/lte goals,
            as a fraction of the target value.
        max_stat_rows: Maximum number of stat rows accepted per request.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Goals
    goal_tolerance_pct: float = Field(
        default=0.10,
        alias="GOAL_TOLERANCE_PCT",
        ge=0.0,
        le=1.0,
        description="At-risk band width as a fraction of the goal target",
    )

    # Input limits
    max_stat_rows: int = Field(
        default=10_000,
        alias="MAX_STAT_ROWS",
        ge=1,
        description="Maximum stat rows accepted in a single request",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    log_dir: str = Field(
        default="logs",
        alias="LOG_DIR",
        description="Directory for log files",
    )

    @field_validator("log_dir")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Ensure path strings are valid."""
        if not v or v.isspace():
            raise ValueError("Path cannot be empty or whitespace")
        return v

    @property
    def log_dir_obj(self) -> Path:
        """Return log directory as Path object."""
        return Path(self.log_dir)

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        self.log_dir_obj.mkdir(parents=True, exist_ok=True)


# Singleton pattern for settings
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        Settings instance loaded from environment.

    Example:
        >>> settings = get_settings()
        >>> print(settings.max_stat_rows)
        10000
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None
