"""Exception hierarchy for refmatch.

This module re-exports all exceptions from domain-specific modules
for convenience.
"""

from .base_exceptions import RefmatchException
from .config_exceptions import ConfigurationError
from .vision_exceptions import DecodeError, ElementNotFoundException, PerceptionException

__all__ = [
    "RefmatchException",
    "ConfigurationError",
    "PerceptionException",
    "DecodeError",
    "ElementNotFoundException",
]
