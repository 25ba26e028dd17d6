"""Locator strategies for finding UI elements.

A strategy is one way of locating an element in a captured frame. The
locator layer is polymorphic over strategies so other kinds of element
(text, icons) can be added next to image matching without touching the
matcher itself.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..cache import ReferenceImageCache
from ..find.matchers import TemplateMatcher
from ..logging import get_logger
from ..model.element import Frame, ReferenceImage
from ..model.match import MatchConfig, MatchResult

logger = get_logger(__name__)

ImageTarget = ReferenceImage | str | Path


@dataclass
class ScreenContext:
    """Context information about the frame being searched.

    Attributes:
        frame: Captured frame
        timestamp: When the frame was captured (``time.time()``)
        metadata: Additional context metadata
    """

    frame: Frame
    timestamp: float = field(default_factory=time.time)
    metadata: dict[str, Any] = field(default_factory=dict)


class LocatorStrategy(ABC):
    """Base class for locator strategies."""

    @abstractmethod
    def locate(self, target: Any, config: MatchConfig, context: ScreenContext) -> MatchResult:
        """Locate ``target`` in the context's frame.

        Args:
            target: What to look for; its type depends on the strategy
            config: Match configuration
            context: Screen context with the captured frame

        Returns:
            Complete MatchResult (``found`` may be False)
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get strategy name for logging and reporting."""
        pass

    @abstractmethod
    def can_handle(self, target: Any) -> bool:
        """Check if this strategy can handle the given target."""
        pass


class ImageMatchStrategy(LocatorStrategy):
    """Locate a custom element by its reference image.

    Targets may be decoded ReferenceImages or image paths; paths are decoded
    through a shared ReferenceImageCache.
    """

    def __init__(
        self,
        matcher: TemplateMatcher | None = None,
        cache: ReferenceImageCache | None = None,
    ) -> None:
        self.matcher = matcher or TemplateMatcher()
        self.cache = cache or ReferenceImageCache()

    def resolve(self, target: ImageTarget) -> ReferenceImage:
        """Turn a target into a decoded reference image.

        Raises:
            DecodeError: If a path target cannot be decoded
        """
        if isinstance(target, ReferenceImage):
            return target
        return self.cache.get(target)

    def locate(self, target: ImageTarget, config: MatchConfig, context: ScreenContext) -> MatchResult:
        reference = self.resolve(target)
        return self.matcher.match(context.frame, reference, config)

    def get_name(self) -> str:
        return "image_match"

    def can_handle(self, target: Any) -> bool:
        return isinstance(target, ReferenceImage | str | Path)
