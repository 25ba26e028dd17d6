"""MatchConfig - validated options for one template match.

All fields carry documented defaults and are validated when the config is
constructed, so an invalid threshold, rotation step or mask fails before any
matching work begins.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from numbers import Real
from typing import Any

from ...config import get_settings
from ...config_exceptions import ConfigurationError

Point = tuple[float, float]

FULL_TURN = 360.0


class ImageCompareFormat(Enum):
    """Pixel model used when comparing the reference against the frame."""

    GRAYSCALE = "grayscale"
    COLOR = "color"

    @classmethod
    def parse(cls, value: ImageCompareFormat | str) -> ImageCompareFormat:
        """Parse an enum member or its case-insensitive name/value."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized == "colour":
                normalized = "color"
            for member in cls:
                if member.value == normalized:
                    return member
        raise ConfigurationError(
            "image_compare_format",
            f"expected one of {[m.value for m in cls]}, got {value!r}",
        )


def _default_threshold() -> float:
    return get_settings().default_threshold


def _default_compare_format() -> ImageCompareFormat:
    return ImageCompareFormat.parse(get_settings().default_compare_format)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _normalize_mask(points: Iterable[Any] | None) -> tuple[Point, ...] | None:
    if points is None:
        return None

    normalized: list[Point] = []
    for point in points:
        try:
            x, y = point
        except (TypeError, ValueError) as e:
            raise ConfigurationError("mask", f"point {point!r} is not an (x, y) pair") from e
        if not (_is_number(x) and _is_number(y)) or not (math.isfinite(x) and math.isfinite(y)):
            raise ConfigurationError("mask", f"point {point!r} has non-finite coordinates")
        normalized.append((float(x), float(y)))

    if len(normalized) < 3:
        raise ConfigurationError(
            "mask", f"polygon needs at least 3 points, got {len(normalized)}"
        )
    return tuple(normalized)


@dataclass(frozen=True)
class MatchConfig:
    """Immutable, eagerly validated configuration for a match call.

    Attributes:
        threshold: Minimum similarity for ``found`` (0.0-1.0, default 0.9)
        rotation_degree_per_step: Angular increment for rotated variants of the
            reference; 0 disables rotation
        image_compare_format: Compare luminance only or full color
        mask: Polygon restricting comparison to the pixels it covers, in
            reference image coordinates
        name: Descriptive label carried through to the result
    """

    threshold: float = field(default_factory=_default_threshold)
    rotation_degree_per_step: float = 0.0
    image_compare_format: ImageCompareFormat = field(default_factory=_default_compare_format)
    mask: tuple[Point, ...] | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        threshold = self.threshold
        if not _is_number(threshold) or not math.isfinite(threshold):
            raise ConfigurationError("threshold", f"expected a number, got {threshold!r}")
        if not 0.0 <= threshold <= 1.0:
            raise ConfigurationError("threshold", f"must be in [0.0, 1.0], got {threshold}")

        step = self.rotation_degree_per_step
        if not _is_number(step) or not math.isfinite(step):
            raise ConfigurationError(
                "rotation_degree_per_step", f"expected a number, got {step!r}"
            )
        if step < 0 or step >= FULL_TURN:
            raise ConfigurationError(
                "rotation_degree_per_step",
                f"must be 0 (disabled) or in (0, 360), got {step}",
            )

        object.__setattr__(self, "threshold", float(threshold))
        object.__setattr__(self, "rotation_degree_per_step", float(step))
        object.__setattr__(
            self, "image_compare_format", ImageCompareFormat.parse(self.image_compare_format)
        )
        object.__setattr__(self, "mask", _normalize_mask(self.mask))

    @property
    def rotation_enabled(self) -> bool:
        return self.rotation_degree_per_step > 0

    @property
    def grayscale(self) -> bool:
        return self.image_compare_format is ImageCompareFormat.GRAYSCALE

    def rotation_angles(self) -> tuple[float, ...]:
        """Candidate angles in scan order: 0, step, 2*step, ... below 360."""
        if not self.rotation_enabled:
            return (0.0,)
        step = self.rotation_degree_per_step
        count = math.ceil(FULL_TURN / step)
        return tuple(k * step for k in range(count) if k * step < FULL_TURN)

    def evolve(self, **changes: Any) -> MatchConfig:
        """Return a copy with ``changes`` applied (re-validated)."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "threshold": self.threshold,
            "rotation_degree_per_step": self.rotation_degree_per_step,
            "image_compare_format": self.image_compare_format.value,
            "mask": [list(p) for p in self.mask] if self.mask else None,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MatchConfig:
        """Build a config from snake_case or camelCase keys.

        Unknown keys are rejected so typos do not silently fall back to
        defaults.
        """
        aliases = {
            "rotationDegreePerStep": "rotation_degree_per_step",
            "imageCompareFormat": "image_compare_format",
        }
        known = {"threshold", "rotation_degree_per_step", "image_compare_format", "mask", "name"}

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            target = aliases.get(key, key)
            if target not in known:
                raise ConfigurationError(key, "unknown match option")
            if value is not None or target in ("mask", "name"):
                kwargs[target] = value
        return cls(**kwargs)
