"""MatchResult - outcome of one template match call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..element.region import Region


@dataclass(frozen=True)
class MatchResult:
    """Best match of a reference image inside a frame.

    A result is always complete: it reports the best scoring location even
    when that location falls below the threshold, in which case ``found`` is
    False.

    Attributes:
        region: Matched area in frame coordinates. Width and height are those of
            the compared (possibly rotated) reference variant.
        score: Similarity in [0.0, 1.0]; 1.0 is a pixel-exact match
        angle: Rotation in degrees (counter-clockwise) of the best variant
        threshold: Threshold the score was judged against
        name: Label from the match configuration
    """

    region: Region
    score: float
    angle: float
    threshold: float
    name: str | None = None

    @property
    def found(self) -> bool:
        return self.score >= self.threshold

    @property
    def x(self) -> int:
        return self.region.x

    @property
    def y(self) -> int:
        return self.region.y

    @property
    def location(self) -> tuple[int, int]:
        """Top-left corner of the match."""
        return self.region.top_left

    @property
    def center(self) -> tuple[int, int]:
        """Point an input collaborator would click."""
        return self.region.center

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "found": self.found,
            "score": self.score,
            "threshold": self.threshold,
            "angle": self.angle,
            "region": self.region.to_dict(),
            "center": list(self.center),
        }

    def __str__(self) -> str:
        status = "found" if self.found else "not found"
        label = f"'{self.name}' " if self.name else ""
        return f"Match {label}{status} at {self.region} score={self.score:.4f} angle={self.angle:g}"
