"""Polygon masks for restricting which reference pixels are compared."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..config_exceptions import ConfigurationError

# Tolerance for treating a pixel as lying on a polygon edge
EDGE_EPSILON = 1e-9


@dataclass(frozen=True)
class MaskMetadata:
    """Metadata about a generated mask."""

    density: float  # Fraction of active pixels (0.0-1.0)
    active_pixels: int
    total_pixels: int

    @property
    def is_empty(self) -> bool:
        return self.active_pixels == 0


def polygon_to_mask(
    points: Sequence[tuple[float, float]], width: int, height: int
) -> np.ndarray[Any, Any]:
    """Rasterize a polygon into a boolean inclusion mask.

    Pixel ``(x, y)`` is tested at its integer coordinate. A pixel is inside
    when the even-odd rule says so or when it lies exactly on an edge or
    vertex, so the boundary is inclusive.

    Args:
        points: Ordered polygon vertices as (x, y); the polygon is closed
            implicitly
        width: Mask width in pixels
        height: Mask height in pixels

    Returns:
        Boolean array of shape (height, width)

    Raises:
        ConfigurationError: If fewer than 3 vertices are given
    """
    if len(points) < 3:
        raise ConfigurationError("mask", f"polygon needs at least 3 points, got {len(points)}")

    vertices = np.asarray(points, dtype=np.float64)
    px, py = np.meshgrid(
        np.arange(width, dtype=np.float64), np.arange(height, dtype=np.float64)
    )

    inside = np.zeros((height, width), dtype=bool)
    on_edge = np.zeros((height, width), dtype=bool)

    for i in range(len(vertices)):
        x1, y1 = vertices[i]
        x2, y2 = vertices[(i + 1) % len(vertices)]

        cross = (x2 - x1) * (py - y1) - (y2 - y1) * (px - x1)
        within_box = (
            (px >= min(x1, x2) - EDGE_EPSILON)
            & (px <= max(x1, x2) + EDGE_EPSILON)
            & (py >= min(y1, y2) - EDGE_EPSILON)
            & (py <= max(y1, y2) + EDGE_EPSILON)
        )
        on_edge |= within_box & (np.abs(cross) <= EDGE_EPSILON)

        if y1 == y2:
            continue
        straddles = (y1 > py) != (y2 > py)
        x_at_y = x1 + (py - y1) * (x2 - x1) / (y2 - y1)
        inside ^= straddles & (px < x_at_y)

    return inside | on_edge


def mask_metadata(mask: np.ndarray[Any, Any]) -> MaskMetadata:
    """Summarize a boolean mask.

    Args:
        mask: Boolean or 0/1 mask

    Returns:
        MaskMetadata with active pixel counts
    """
    total = int(mask.size)
    active = int(np.count_nonzero(mask))
    return MaskMetadata(
        density=active / total if total else 0.0,
        active_pixels=active,
        total_pixels=total,
    )
