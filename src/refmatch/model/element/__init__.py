"""Element model: rasters and regions."""

from .image import Frame, Raster, ReferenceImage
from .region import Region

__all__ = ["Frame", "Raster", "ReferenceImage", "Region"]
