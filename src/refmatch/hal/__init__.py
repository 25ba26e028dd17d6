"""Hardware abstraction layer: interfaces to capture and decode collaborators."""

from .implementations import FileScreenCapture, PILImageDecoder, StaticScreenCapture
from .interfaces import IImageDecoder, IScreenCapture

__all__ = [
    "IImageDecoder",
    "IScreenCapture",
    "PILImageDecoder",
    "FileScreenCapture",
    "StaticScreenCapture",
]
