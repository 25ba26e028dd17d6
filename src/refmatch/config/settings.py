"""Configuration management for refmatch using pydantic-settings.

Settings are read from environment variables (``REFMATCH_`` prefix) and an
optional ``.env`` file. Per-call matching options live in
:class:`refmatch.model.match.MatchConfig`; this module only carries the
process-wide defaults.
"""

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_workers() -> int:
    return max(1, min(8, os.cpu_count() or 1))


class RefmatchSettings(BaseSettings):
    """Main configuration settings for refmatch."""

    model_config = SettingsConfigDict(
        env_prefix="REFMATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Matching defaults
    default_threshold: float = Field(
        0.9, ge=0.0, le=1.0, description="Default similarity threshold for matching"
    )
    default_compare_format: Literal["grayscale", "color"] = Field(
        "grayscale", description="Default pixel comparison format"
    )

    # Performance settings
    max_workers: int = Field(
        default_factory=_default_workers, ge=1, description="Worker threads for the offset scan"
    )
    band_rows: int = Field(32, ge=1, description="Offset rows scanned per work unit")
    reference_cache_size: int = Field(
        64, ge=1, description="Maximum number of decoded reference images to cache"
    )

    # Locator settings
    wait_timeout: float = Field(5.0, ge=0.0, description="Default wait_for timeout in seconds")
    poll_interval: float = Field(0.25, gt=0.0, description="Delay between wait_for attempts")

    # Logging settings
    debug_mode: bool = Field(False, description="Enable debug logging")
    log_level: str = Field("INFO", description="Log level when debug_mode is off")
    log_file: Path | None = Field(None, description="Optional log file path")
    structured_logs: bool = Field(False, description="Render logs as JSON lines")


# Singleton instance
_settings: RefmatchSettings | None = None


def get_settings() -> RefmatchSettings:
    """Get the singleton settings instance.

    Returns:
        RefmatchSettings instance
    """
    global _settings

    if _settings is None:
        _settings = RefmatchSettings()

    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (mainly for testing)."""
    global _settings
    _settings = None
