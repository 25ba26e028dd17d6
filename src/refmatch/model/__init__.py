"""Data model for refmatch."""

from .element import Frame, Raster, ReferenceImage, Region
from .match import ImageCompareFormat, MatchConfig, MatchResult

__all__ = [
    "Frame",
    "Raster",
    "ReferenceImage",
    "Region",
    "ImageCompareFormat",
    "MatchConfig",
    "MatchResult",
]
