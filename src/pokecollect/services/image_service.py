"""
Image loading with an in-memory bounded cache.

Failures never propagate: a missing or broken image is logged and reported
as None so callers can show a placeholder.
"""
import time
from io import BytesIO
from typing import Optional
from urllib.parse import urlparse

import requests
from requests.exceptions import RequestException
from PIL import Image, UnidentifiedImageError

from pokecollect.config.settings import settings
from pokecollect.core.bounded_cache import BoundedCache
from pokecollect.utils.logger import logger


class ImageCacheService:
    """
    Loads card and set images by URL, caching decoded images by URL string.

    Cached entries are never refreshed. Concurrent loads of the same URL are
    not coalesced; whichever finishes last is what stays cached.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        cache: Optional[BoundedCache] = None,
        request_timeout: Optional[float] = None,
        resource_timeout: Optional[float] = None,
    ):
        self._session = session if session is not None else requests.Session()
        self._cache = cache if cache is not None else BoundedCache(
            count_limit=settings.IMAGE_CACHE_COUNT_LIMIT,
            cost_limit=settings.IMAGE_CACHE_COST_LIMIT,
        )
        self.request_timeout = (request_timeout if request_timeout is not None
                                else settings.IMAGE_REQUEST_TIMEOUT)
        self.resource_timeout = (resource_timeout if resource_timeout is not None
                                 else settings.IMAGE_RESOURCE_TIMEOUT)

    @property
    def cache(self) -> BoundedCache:
        return self._cache

    def load_image(self, url_string: Optional[str]) -> Optional[Image.Image]:
        """
        Load an image from a URL, using the cache when possible.

        Args:
            url_string: Image URL; None or unparsable URLs return None

        Returns:
            Decoded image, or None on any failure
        """
        if not url_string:
            return None

        try:
            parsed = urlparse(url_string)
        except ValueError:
            parsed = None
        if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
            logger.debug(f"Ignoring unparsable image URL: {url_string!r}")
            return None

        cached = self._cache.get(url_string)
        if cached is not None:
            return cached

        data = self._download(url_string)
        if data is None:
            return None

        image = self._decode(data, url_string)
        if image is None:
            return None

        self._cache.put(url_string, image, cost=len(data))
        return image

    def clear_cache(self):
        """Clear all cached images."""
        self._cache.clear()
        logger.info("Image cache cleared")

    def close(self):
        self._session.close()

    def _download(self, url: str) -> Optional[bytes]:
        deadline = time.monotonic() + self.resource_timeout
        try:
            response = self._session.get(url, timeout=self.request_timeout, stream=True)
            try:
                if not response.ok:
                    logger.warning(f"Image request for {url} returned {response.status_code}")
                    return None

                chunks = []
                for chunk in response.iter_content(chunk_size=settings.IMAGE_CHUNK_SIZE):
                    chunks.append(chunk)
                    if time.monotonic() > deadline:
                        logger.warning(f"Image download exceeded {self.resource_timeout}s: {url}")
                        return None
                return b"".join(chunks)
            finally:
                response.close()
        except RequestException as e:
            logger.error(f"Failed to load image from URL {url}: {e}")
            return None

    @staticmethod
    def _decode(data: bytes, url: str) -> Optional[Image.Image]:
        try:
            image = Image.open(BytesIO(data))
            image.load()
            return image
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            logger.error(f"Failed to create image from data for URL {url}: {e}")
            return None
