"""refmatch - locate custom element images inside screen frames.

Usage:
    from refmatch import Frame, MatchConfig, PILImageDecoder, match

    reference = PILImageDecoder().decode("images/save_button.png")
    result = match(frame, reference, MatchConfig(threshold=0.85, rotation_degree_per_step=90))
    if result.found:
        click_at(*result.center)
"""

__version__ = "0.1.0"

from .cache import ReferenceImageCache
from .exceptions import (
    ConfigurationError,
    DecodeError,
    ElementNotFoundException,
    PerceptionException,
    RefmatchException,
)
from .find import TemplateMatcher, match
from .fluent import CustomElement
from .hal import (
    FileScreenCapture,
    IImageDecoder,
    IScreenCapture,
    PILImageDecoder,
    StaticScreenCapture,
)
from .locators import ElementLocator, ImageMatchStrategy, LocatorStrategy
from .model import (
    Frame,
    ImageCompareFormat,
    MatchConfig,
    MatchResult,
    ReferenceImage,
    Region,
)

__all__ = [
    "__version__",
    "match",
    "TemplateMatcher",
    "Frame",
    "ReferenceImage",
    "Region",
    "MatchConfig",
    "MatchResult",
    "ImageCompareFormat",
    "ReferenceImageCache",
    "IImageDecoder",
    "IScreenCapture",
    "PILImageDecoder",
    "FileScreenCapture",
    "StaticScreenCapture",
    "LocatorStrategy",
    "ImageMatchStrategy",
    "ElementLocator",
    "CustomElement",
    "RefmatchException",
    "ConfigurationError",
    "PerceptionException",
    "DecodeError",
    "ElementNotFoundException",
]
