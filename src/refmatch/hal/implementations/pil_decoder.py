"""Pillow-based image decoder."""

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from ...logging import get_logger, get_performance_logger
from ...model.element import ReferenceImage
from ...vision_exceptions import DecodeError
from ..interfaces.image_decoder import IImageDecoder

logger = get_logger(__name__)


class PILImageDecoder(IImageDecoder):
    """Decode reference images with Pillow.

    Grayscale (mode ``L``) files stay single-channel; every other mode is
    converted to RGB, dropping any alpha channel.
    """

    def decode(self, path: str | Path) -> ReferenceImage:
        """Decode an image file into a ReferenceImage.

        Args:
            path: Path to the image file

        Returns:
            Decoded ReferenceImage named after the file stem

        Raises:
            DecodeError: If the file is missing, unreadable or not an image
        """
        path = Path(path)
        try:
            with get_performance_logger().timed("decode", path=str(path)):
                with Image.open(path) as pil_image:
                    pil_image.load()
                    if pil_image.mode not in ("L", "RGB"):
                        pil_image = pil_image.convert("RGB")
                    reference = ReferenceImage.from_pil(pil_image, name=path.stem, path=path)
        except FileNotFoundError as e:
            raise DecodeError(str(path), "file not found") from e
        except UnidentifiedImageError as e:
            raise DecodeError(str(path), "not a recognized image format") from e
        except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
            raise DecodeError(str(path), str(e)) from e

        logger.debug(
            "reference_decoded",
            path=str(path),
            width=reference.width,
            height=reference.height,
            channels=reference.channels,
        )
        return reference
