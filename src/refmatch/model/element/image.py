"""Raster images used by the matcher.

A :class:`Frame` is a captured screen image and a :class:`ReferenceImage` is
the user supplied template ("custom element") searched for inside it. Both
wrap a read-only ``uint8`` NumPy array that is either RGB (``H x W x 3``) or
single-channel grayscale (``H x W``).
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

import cv2
import numpy as np
from PIL import Image as PILImage

T = TypeVar("T")


def _as_pixels(array: Any) -> np.ndarray:
    """Normalize an array-like into a read-only uint8 RGB or grayscale array."""
    pixels = np.array(array, copy=True)
    if pixels.ndim == 3 and pixels.shape[2] == 1:
        pixels = pixels[:, :, 0]
    elif pixels.ndim == 3 and pixels.shape[2] == 4:
        pixels = pixels[:, :, :3]

    if pixels.ndim not in (2, 3) or (pixels.ndim == 3 and pixels.shape[2] != 3):
        raise ValueError(f"Unsupported pixel array shape {pixels.shape}")
    if pixels.shape[0] == 0 or pixels.shape[1] == 0:
        raise ValueError("Image must be at least 1x1 pixels")

    if pixels.dtype != np.uint8:
        if not np.issubdtype(pixels.dtype, np.integer):
            raise ValueError(
                f"Unsupported pixel dtype {pixels.dtype}; expected integer values in [0, 255]"
            )
        pixels = np.clip(pixels, 0, 255).astype(np.uint8)

    pixels = np.ascontiguousarray(pixels)
    pixels.flags.writeable = False
    return pixels


@dataclass(frozen=True, eq=False)
class Raster:
    """Common pixel container for frames and reference images."""

    pixels: np.ndarray = field(repr=False)
    name: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixels", _as_pixels(self.pixels))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """Get (width, height)."""
        return (self.width, self.height)

    @property
    def channels(self) -> int:
        return 1 if self.pixels.ndim == 2 else int(self.pixels.shape[2])

    @property
    def is_grayscale(self) -> bool:
        return self.pixels.ndim == 2

    def to_pil(self) -> PILImage.Image:
        """Convert to a PIL Image (mode ``L`` or ``RGB``)."""
        return PILImage.fromarray(self.pixels)


@dataclass(frozen=True, eq=False)
class Frame(Raster):
    """A captured screen frame.

    Frames are created fresh per automation step by a capture collaborator,
    borrowed by the matcher for one call and then discarded.
    """

    @classmethod
    def from_numpy(cls, array: np.ndarray, name: str | None = None) -> Frame:
        """Create a Frame from an RGB or grayscale NumPy array."""
        return cls(pixels=array, name=name)

    @classmethod
    def from_bgr(cls, array: np.ndarray, name: str | None = None) -> Frame:
        """Create a Frame from an OpenCV style BGR array."""
        if array.ndim == 3:
            array = cv2.cvtColor(array, cv2.COLOR_BGR2RGB)
        return cls(pixels=array, name=name)

    @classmethod
    def from_pil(cls, image: PILImage.Image, name: str | None = None) -> Frame:
        """Create a Frame from a PIL Image."""
        if image.mode not in ("L", "RGB"):
            image = image.convert("RGB")
        return cls(pixels=np.asarray(image), name=name)


@dataclass(frozen=True, eq=False)
class ReferenceImage(Raster):
    """A decoded reference image searched for inside frames.

    Reference images are decoded once per path and reused across many match
    calls. Preprocessed variants (compare format, rotation, mask) are cached
    on the instance; the cache is lock-guarded so concurrent match calls may
    share one reference.
    """

    path: Path | None = None
    _variants: dict[Hashable, Any] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @classmethod
    def from_numpy(
        cls, array: np.ndarray, name: str | None = None, path: str | Path | None = None
    ) -> ReferenceImage:
        """Create a ReferenceImage from an RGB or grayscale NumPy array."""
        return cls(pixels=array, name=name, path=Path(path) if path else None)

    @classmethod
    def from_pil(
        cls, image: PILImage.Image, name: str | None = None, path: str | Path | None = None
    ) -> ReferenceImage:
        """Create a ReferenceImage from a PIL Image."""
        if image.mode not in ("L", "RGB"):
            image = image.convert("RGB")
        return cls(pixels=np.asarray(image), name=name, path=Path(path) if path else None)

    @property
    def label(self) -> str:
        """Human readable identifier for logs."""
        if self.name:
            return self.name
        if self.path:
            return str(self.path)
        return f"{self.width}x{self.height} reference"

    def get_variant(self, key: Hashable, factory: Callable[[], T]) -> T:
        """Return the cached variant for ``key``, building it once if missing.

        Args:
            key: Hashable description of the preprocessing applied
            factory: Builds the variant on a cache miss

        Returns:
            Cached or newly built variant
        """
        with self._lock:
            if key in self._variants:
                return self._variants[key]  # type: ignore[no-any-return]

        variant = factory()

        with self._lock:
            # Another thread may have won the race; keep the first one stored
            return self._variants.setdefault(key, variant)  # type: ignore[no-any-return]

    def clear_variants(self) -> None:
        with self._lock:
            self._variants.clear()

    @property
    def cached_variant_count(self) -> int:
        with self._lock:
            return len(self._variants)
