"""Image decoding interface definition."""

from abc import ABC, abstractmethod
from pathlib import Path

from ...model.element import ReferenceImage


class IImageDecoder(ABC):
    """Interface for turning image files into reference images."""

    @abstractmethod
    def decode(self, path: str | Path) -> ReferenceImage:
        """Decode an image file.

        Args:
            path: Path to the image file

        Returns:
            Decoded ReferenceImage

        Raises:
            DecodeError: If the file cannot be read or is not a raster image
        """
        pass
