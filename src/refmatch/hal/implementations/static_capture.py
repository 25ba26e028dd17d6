"""Frame sources that replay existing images instead of grabbing the screen.

Used for offline runs (the CLI) and for tests of the locator layer.
"""

import threading
from collections.abc import Iterable
from pathlib import Path

from ...model.element import Frame
from ..interfaces.image_decoder import IImageDecoder
from ..interfaces.screen_capture import IScreenCapture
from .pil_decoder import PILImageDecoder


class StaticScreenCapture(IScreenCapture):
    """Replay a scripted sequence of frames.

    Each ``capture()`` returns the next frame; once the sequence is exhausted
    the last frame is repeated.
    """

    def __init__(self, frames: Frame | Iterable[Frame]) -> None:
        """Initialize with one frame or a sequence of frames.

        Raises:
            ValueError: If no frames are given
        """
        self._frames = [frames] if isinstance(frames, Frame) else list(frames)
        if not self._frames:
            raise ValueError("StaticScreenCapture needs at least one frame")
        self._index = 0
        self._lock = threading.Lock()
        self.capture_count = 0

    def capture(self) -> Frame:
        with self._lock:
            frame = self._frames[min(self._index, len(self._frames) - 1)]
            self._index += 1
            self.capture_count += 1
            return frame


class FileScreenCapture(IScreenCapture):
    """Read the frame from an image file on every capture."""

    def __init__(self, path: str | Path, decoder: IImageDecoder | None = None) -> None:
        self.path = Path(path)
        self.decoder = decoder or PILImageDecoder()

    def capture(self) -> Frame:
        """Decode the file as a frame.

        Raises:
            DecodeError: If the file cannot be decoded
        """
        decoded = self.decoder.decode(self.path)
        return Frame(pixels=decoded.pixels, name=decoded.name)
