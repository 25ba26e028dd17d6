"""Match configuration and result models."""

from .match_config import ImageCompareFormat, MatchConfig
from .match_result import MatchResult

__all__ = ["ImageCompareFormat", "MatchConfig", "MatchResult"]
