"""HAL interfaces for external collaborators."""

from .image_decoder import IImageDecoder
from .screen_capture import IScreenCapture

__all__ = ["IImageDecoder", "IScreenCapture"]
