"""In-memory cache of decoded reference images.

Decoding a reference image is far cheaper than matching it, but automation
scripts look for the same few custom elements over and over. Caching by path
also keeps each reference's rotation-variant cache alive across calls.
"""

import threading
from collections import OrderedDict
from pathlib import Path

from ..config import get_settings
from ..hal.implementations.pil_decoder import PILImageDecoder
from ..hal.interfaces.image_decoder import IImageDecoder
from ..logging import get_logger
from ..model.element import ReferenceImage

logger = get_logger(__name__)


class ReferenceImageCache:
    """Thread-safe LRU cache of decoded reference images keyed by file path.

    Decode errors propagate to the caller and nothing is cached for the
    failing path.

    Attributes:
        max_size: Maximum number of cached references
        hits: Number of lookups served from cache
        misses: Number of lookups that decoded the file
    """

    def __init__(self, decoder: IImageDecoder | None = None, max_size: int | None = None) -> None:
        """Initialize the cache.

        Args:
            decoder: Decoder used on a miss; defaults to PILImageDecoder
            max_size: Capacity; defaults to ``RefmatchSettings.reference_cache_size``

        Raises:
            ValueError: If max_size is not positive
        """
        self.decoder = decoder or PILImageDecoder()
        self.max_size = max_size if max_size is not None else get_settings().reference_cache_size
        if self.max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {self.max_size}")

        self._entries: OrderedDict[str, ReferenceImage] = OrderedDict()
        self._lock = threading.RLock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def _key(path: str | Path) -> str:
        return str(Path(path).expanduser().resolve())

    def get(self, path: str | Path) -> ReferenceImage:
        """Return the decoded reference for ``path``, decoding it on a miss.

        The lock is held while decoding so a path is decoded at most once even
        when several threads ask for it at the same time.

        Raises:
            DecodeError: If the file cannot be decoded
        """
        key = self._key(path)
        with self._lock:
            reference = self._entries.get(key)
            if reference is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return reference

            reference = self.decoder.decode(path)
            self.misses += 1
            self._entries[key] = reference
            if len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("reference_evicted", path=evicted)
            return reference

    def invalidate(self, path: str | Path) -> bool:
        """Drop one path from the cache.

        Returns:
            True if the path was cached
        """
        with self._lock:
            return self._entries.pop(self._key(path), None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str | Path):
            return False
        with self._lock:
            return self._key(path) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
