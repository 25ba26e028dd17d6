"""Region - a rectangular area of a frame."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Region:
    """Represents a rectangular area on the screen.

    A Region defines a rectangle using x,y coordinates for the top-left corner
    and width,height dimensions. Match results use it to report where a
    reference image was found inside a frame.
    """

    x: int = 0
    """X coordinate of top-left corner."""

    y: int = 0
    """Y coordinate of top-left corner."""

    width: int = 0
    """Width of the region."""

    height: int = 0
    """Height of the region."""

    @property
    def right(self) -> int:
        """Get the right edge x-coordinate (exclusive)."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Get the bottom edge y-coordinate (exclusive)."""
        return self.y + self.height

    @property
    def top_left(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def center(self) -> tuple[int, int]:
        """Get the center point, rounded down to whole pixels."""
        return (self.x + self.width // 2, self.y + self.height // 2)

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        """Check whether a point lies inside the region.

        Args:
            x: X coordinate
            y: Y coordinate

        Returns:
            True if the point is inside
        """
        return self.x <= x < self.right and self.y <= y < self.bottom

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    def __str__(self) -> str:
        return f"R[{self.x},{self.y} {self.width}x{self.height}]"
