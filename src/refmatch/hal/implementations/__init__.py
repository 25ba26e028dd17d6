"""HAL implementations."""

from .pil_decoder import PILImageDecoder
from .static_capture import FileScreenCapture, StaticScreenCapture

__all__ = ["PILImageDecoder", "FileScreenCapture", "StaticScreenCapture"]
