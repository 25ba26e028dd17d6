"""Locator layer for refmatch.

Orchestrates capture and matching for automation steps.

Key Components:
    - LocatorStrategy: Base interface for ways of locating an element
    - ImageMatchStrategy: Locates custom elements by reference image
    - ElementLocator: Runs strategies on captured frames and owns the
      wait/retry policy
"""

from .element_locator import ElementLocator
from .strategies import ImageMatchStrategy, LocatorStrategy, ScreenContext

__all__ = ["ElementLocator", "ImageMatchStrategy", "LocatorStrategy", "ScreenContext"]
