"""Similarity metrics for the exhaustive template scan.

A metric turns per-pixel differences into a cost and normalizes the summed
cost of one candidate offset into a similarity score in [0.0, 1.0]. Costs are
accumulated as integers, so a pixel-exact match always scores exactly 1.0 and
equal candidates always tie exactly.

The scan prefilters offsets with OpenCV's squared-difference map, so every
metric also bounds which squared costs can still contain its own best offset.
"""

import math
from abc import ABC, abstractmethod
from typing import Any

import numpy as np

CHANNEL_MAX = 255


class SimilarityMetric(ABC):
    """Strategy interface for scoring a candidate offset.

    Implementations must be monotonic in the absolute pixel difference and
    deterministic.
    """

    name: str = "abstract"

    @property
    @abstractmethod
    def max_cost(self) -> int:
        """Largest possible cost of a single channel value."""

    @abstractmethod
    def pixel_cost(self, diff: np.ndarray[Any, Any]) -> np.ndarray[Any, Any]:
        """Cost of signed per-channel differences (int32 in, integer out)."""

    @abstractmethod
    def candidate_limit(self, squared_cost: float, value_count: int) -> float:
        """Upper bound on the squared-difference cost of this metric's best offset.

        Args:
            squared_cost: Squared-difference cost of any offset
            value_count: Included pixels times channels

        Returns:
            Squared cost above which an offset cannot beat that offset
        """

    def score(self, cost_sum: int, value_count: int) -> float:
        """Normalize a summed cost over ``value_count`` channel values.

        Args:
            cost_sum: Sum of ``pixel_cost`` over all included values
            value_count: Included pixels times channels

        Returns:
            Similarity in [0.0, 1.0]
        """
        if value_count <= 0:
            raise ValueError("value_count must be positive")
        score = 1.0 - cost_sum / (value_count * self.max_cost)
        return min(1.0, max(0.0, score))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SquaredDifferenceMetric(SimilarityMetric):
    """1 minus the mean squared difference, normalized by 255 squared.

    This is the default metric. Squaring penalizes a few strongly differing
    pixels more than many slightly differing ones.
    """

    name = "squared"

    @property
    def max_cost(self) -> int:
        return CHANNEL_MAX * CHANNEL_MAX

    def pixel_cost(self, diff: np.ndarray[Any, Any]) -> np.ndarray[Any, Any]:
        return diff * diff

    def candidate_limit(self, squared_cost: float, value_count: int) -> float:
        return squared_cost


class AbsoluteDifferenceMetric(SimilarityMetric):
    """1 minus the mean absolute difference, normalized by 255."""

    name = "absolute"

    @property
    def max_cost(self) -> int:
        return CHANNEL_MAX

    def pixel_cost(self, diff: np.ndarray[Any, Any]) -> np.ndarray[Any, Any]:
        return np.abs(diff)

    def candidate_limit(self, squared_cost: float, value_count: int) -> float:
        # sq <= 255 * abs and abs <= sqrt(n * sq)
        return CHANNEL_MAX * math.sqrt(value_count * max(squared_cost, 0.0))


METRICS: dict[str, type[SimilarityMetric]] = {
    SquaredDifferenceMetric.name: SquaredDifferenceMetric,
    AbsoluteDifferenceMetric.name: AbsoluteDifferenceMetric,
}


def get_metric(name: str) -> SimilarityMetric:
    """Create a metric by name.

    Raises:
        ValueError: If the name is not recognized
    """
    if name not in METRICS:
        raise ValueError(f"Unknown metric: {name}. Available: {list(METRICS.keys())}")
    return METRICS[name]()
