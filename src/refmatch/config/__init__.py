"""Configuration package.

Usage:
    from refmatch.config import get_settings

    settings = get_settings()
    settings.default_threshold
"""

from .settings import RefmatchSettings, get_settings, reset_settings

__all__ = ["RefmatchSettings", "get_settings", "reset_settings"]
