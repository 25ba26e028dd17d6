"""Mask utilities for pattern matching."""

from .polygon_mask import MaskMetadata, mask_metadata, polygon_to_mask

__all__ = ["MaskMetadata", "mask_metadata", "polygon_to_mask"]
