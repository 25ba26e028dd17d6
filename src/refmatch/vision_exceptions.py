"""Vision and perception-related exceptions.

This module contains exceptions for decoding reference images and for
elements that never appear on screen.
"""

from .base_exceptions import RefmatchException


class PerceptionException(RefmatchException):
    """Base exception for perception/matching errors."""

    pass


class DecodeError(PerceptionException):
    """Raised when a reference image cannot be interpreted as a raster."""

    def __init__(self, image_path: str, reason: str, **kwargs) -> None:
        """Initialize with image details."""
        super().__init__(
            f"Cannot decode image '{image_path}': {reason}",
            error_code="DECODE_FAILED",
            context={"image_path": image_path, "reason": reason, **kwargs},
        )
        self.image_path = image_path


class ElementNotFoundException(PerceptionException):
    """Raised when an element does not appear before a wait times out."""

    def __init__(self, element_description: str, timeout: float | None = None, **kwargs) -> None:
        """Initialize with search details."""
        message = f"Element '{element_description}' not found"
        if timeout is not None:
            message += f" within {timeout:g}s"

        super().__init__(
            message,
            error_code="ELEMENT_NOT_FOUND",
            context={"element": element_description, "timeout": timeout, **kwargs},
        )
