"""Caching of decoded reference images."""

from .reference_cache import ReferenceImageCache

__all__ = ["ReferenceImageCache"]
