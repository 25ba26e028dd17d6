"""Reference image preprocessing: compare format, mask and rotation.

Every match call compares the frame against one or more *variants* of the
reference image. A variant is the reference converted to the compare format,
rotated by one candidate angle, together with the boolean mask of pixels that
take part in the comparison.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

import cv2
import numpy as np

from ...config_exceptions import ConfigurationError
from ...logging import get_logger
from ...masks import mask_metadata, polygon_to_mask
from ...model.element import ReferenceImage
from ...model.match import ImageCompareFormat, MatchConfig

logger = get_logger(__name__)

# Interpolation used for rotated reference pixels
ROTATION_INTERPOLATION = cv2.INTER_LINEAR

MASK_ON = 255


def to_compare_pixels(
    pixels: np.ndarray[Any, Any], compare_format: ImageCompareFormat
) -> np.ndarray[Any, Any]:
    """Convert raster pixels to the compare format as an ``H x W x C`` array.

    Grayscale uses the ITU-R BT.601 luma weights (0.299 R + 0.587 G + 0.114 B)
    rounded to uint8, which is what OpenCV's ``COLOR_RGB2GRAY`` computes. Color
    keeps all three channels; a grayscale raster is promoted by repeating its
    single channel.

    Args:
        pixels: uint8 RGB (H x W x 3) or grayscale (H x W) array
        compare_format: Target format

    Returns:
        uint8 array with a trailing channel axis (1 or 3 channels)
    """
    if compare_format is ImageCompareFormat.GRAYSCALE:
        if pixels.ndim == 3:
            pixels = cv2.cvtColor(np.ascontiguousarray(pixels), cv2.COLOR_RGB2GRAY)
        return pixels[:, :, np.newaxis]

    if pixels.ndim == 2:
        return np.repeat(pixels[:, :, np.newaxis], 3, axis=2)
    return pixels


@dataclass(frozen=True, eq=False)
class TemplateVariant:
    """One preprocessed, possibly rotated, copy of a reference image."""

    angle: float
    pixels: np.ndarray[Any, Any] = field(repr=False)  # uint8, H x W x C
    mask: np.ndarray[Any, Any] = field(repr=False)  # bool, H x W

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def channels(self) -> int:
        return int(self.pixels.shape[2])

    @property
    def included_pixels(self) -> int:
        return int(np.count_nonzero(self.mask))

    @property
    def value_count(self) -> int:
        """Number of compared channel values (score denominator)."""
        return self.included_pixels * self.channels

    @property
    def is_full(self) -> bool:
        return self.included_pixels == self.height * self.width

    @cached_property
    def included_values(self) -> np.ndarray[Any, Any]:
        """int32 C x N channel values of the included pixels, row-major."""
        return self.pixels[self.mask].T.astype(np.int32)

    @cached_property
    def match_mask(self) -> np.ndarray[Any, Any] | None:
        """uint8 0/1 mask for ``cv2.matchTemplate``, or None when nothing is excluded."""
        if self.is_full:
            return None
        mask = self.mask.astype(np.uint8)[:, :, np.newaxis]
        return np.ascontiguousarray(np.repeat(mask, self.channels, axis=2))


def _rotation_matrix(width: int, height: int, angle: float) -> tuple[np.ndarray, int, int]:
    """Affine matrix rotating about the pixel grid centre onto a canvas that fits."""
    cx, cy = (width - 1) / 2.0, (height - 1) / 2.0
    matrix = cv2.getRotationMatrix2D((cx, cy), angle, 1.0)
    cos = abs(matrix[0, 0])
    sin = abs(matrix[0, 1])

    # Span of rotated pixel centres, plus one pixel
    new_width = int(math.ceil((width - 1) * cos + (height - 1) * sin - 1e-9)) + 1
    new_height = int(math.ceil((width - 1) * sin + (height - 1) * cos - 1e-9)) + 1

    matrix[0, 2] += (new_width - 1) / 2.0 - cx
    matrix[1, 2] += (new_height - 1) / 2.0 - cy
    return matrix, new_width, new_height


def rotate_image(
    image: np.ndarray[Any, Any],
    angle: float,
    interpolation: int = ROTATION_INTERPOLATION,
    border_value: int = 0,
) -> np.ndarray[Any, Any]:
    """Rotate an image counter-clockwise by ``angle`` degrees without cropping.

    The canvas grows to hold the whole rotated image. Right-angle rotations
    map pixels exactly, matching ``np.rot90``.

    Args:
        image: H x W or H x W x C array
        angle: Degrees, counter-clockwise
        interpolation: OpenCV interpolation flag
        border_value: Fill value for canvas area outside the source

    Returns:
        Rotated array with the same number of dimensions as ``image``
    """
    height, width = image.shape[:2]
    matrix, new_width, new_height = _rotation_matrix(width, height, angle)
    rotated = cv2.warpAffine(
        np.ascontiguousarray(image),
        matrix,
        (new_width, new_height),
        flags=interpolation,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=border_value,
    )
    if image.ndim == 3 and rotated.ndim == 2:
        rotated = rotated[:, :, np.newaxis]
    return rotated


def build_variant(
    pixels: np.ndarray[Any, Any], base_mask: np.ndarray[Any, Any], angle: float
) -> TemplateVariant:
    """Build the variant of preprocessed reference pixels for one angle.

    Rotated pixels are bilinearly interpolated. The inclusion mask is warped
    with the same transform and a pixel stays included only where the warped
    mask keeps its full value, i.e. its whole interpolation footprint lies on
    included source pixels. Canvas corners introduced by rotation are
    therefore excluded.

    Args:
        pixels: uint8 H x W x C reference pixels in compare format
        base_mask: bool H x W inclusion mask of the unrotated reference
        angle: Degrees, counter-clockwise

    Returns:
        TemplateVariant for ``angle``
    """
    if angle == 0:
        return TemplateVariant(
            angle=0.0, pixels=np.ascontiguousarray(pixels), mask=base_mask.copy()
        )

    rotated = rotate_image(pixels, angle)
    mask_values = base_mask.astype(np.uint8) * MASK_ON
    rotated_mask = rotate_image(mask_values, angle) == MASK_ON
    return TemplateVariant(angle=float(angle), pixels=rotated, mask=rotated_mask)


def base_mask_for(reference: ReferenceImage, config: MatchConfig) -> np.ndarray[Any, Any]:
    """Inclusion mask for the unrotated reference.

    Raises:
        ConfigurationError: If the mask polygon excludes every pixel
    """
    if config.mask is None:
        return np.ones((reference.height, reference.width), dtype=bool)

    mask = polygon_to_mask(config.mask, reference.width, reference.height)
    metadata = mask_metadata(mask)
    logger.debug(
        "mask_rasterized",
        reference=reference.label,
        active_pixels=metadata.active_pixels,
        density=metadata.density,
    )
    if metadata.is_empty:
        raise ConfigurationError(
            "mask",
            "polygon covers none of the reference image's pixels",
            reference=reference.label,
        )
    return mask


def reference_variants(reference: ReferenceImage, config: MatchConfig) -> list[TemplateVariant]:
    """All variants for a config, in scan (angle) order, cached on the reference.

    Variants whose rotation leaves no included pixel are dropped.

    Raises:
        ConfigurationError: If the mask excludes every pixel
    """
    compare_format = config.image_compare_format
    pixels = reference.get_variant(
        ("pixels", compare_format.value),
        lambda: to_compare_pixels(reference.pixels, compare_format),
    )
    base_mask = reference.get_variant(
        ("mask", config.mask), lambda: base_mask_for(reference, config)
    )

    variants = []
    for angle in config.rotation_angles():
        variant = reference.get_variant(
            ("variant", compare_format.value, config.mask, angle),
            lambda angle=angle: build_variant(pixels, base_mask, angle),  # type: ignore[misc]
        )
        if variant.included_pixels > 0:
            variants.append(variant)
    return variants
