"""Image service for core business logic.

This service implements the read-through cache policy by coordinating the
cache store (local persistence) and the image fetcher (remote provider).
"""

import structlog

from cat_cache.entities import Found, NotFound
from cat_cache.exceptions import CacheEntryNotFound, CacheStoreError, ImageNotFound, UpstreamError
from cat_cache.protocols import CacheStore, ImageFetcher

logger = structlog.get_logger("cat_cache.services.image_service")


class ImageService:
    """Read-through image cache orchestration.

    This service depends on PROTOCOLS, not concrete implementations:
    - CacheStore: local directory, or anything else holding bytes by key
    - ImageFetcher: http.cat, or any other provider

    Caching is best-effort, serving is not: a fetched image is returned even
    when it cannot be persisted. Misses are never cached, so a key unknown
    upstream is re-fetched on every request.

    Concurrent requests for the same missing key may all fetch and all write;
    the last write wins and every response carries correct content.

    Example:
        ```python
        service = ImageService.create(
            cache_store=FileCacheRepository.create(settings),
            fetcher=HttpImageFetcher.create(settings),
        )
        image = await service.retrieve("418")
        ```
    """

    def __init__(self, cache_store: CacheStore, fetcher: ImageFetcher) -> None:
        """Initialize the image service.

        Args:
            cache_store: Local cache backend (required).
            fetcher: Remote image provider (required).
        """
        self._store = cache_store
        self._fetcher = fetcher

    @classmethod
    def create(cls, cache_store: CacheStore, fetcher: ImageFetcher) -> "ImageService":
        """Factory method mirroring the repositories' ``create`` constructors."""
        return cls(cache_store=cache_store, fetcher=fetcher)

    async def retrieve(self, key: str) -> bytes:
        """Return the image for a key, fetching and caching it on a miss.

        Business logic:
        1. Serve from the cache store when an entry exists
        2. Otherwise fetch from the provider
        3. Persist a fetched image (best-effort) and serve it

        Args:
            key: The resource key

        Returns:
            The image bytes

        Raises:
            CacheStoreError: If a present entry cannot be read
            ImageNotFound: If the provider has no image for the key
            UpstreamError: If the provider request failed
        """
        if await self._store.exists(key):
            try:
                data = await self._store.read(key)
            except CacheEntryNotFound:
                # Removed between the existence check and the read
                logger.info("cache_entry_vanished", key=key)
            else:
                logger.info("cache_hit", key=key, bytes=len(data))
                return data

        logger.info("cache_miss", key=key)
        result = await self._fetcher.fetch(key)

        if isinstance(result, Found):
            await self._populate(key, result.content)
            return result.content

        if isinstance(result, NotFound):
            logger.info("upstream_not_found", key=key)
            raise ImageNotFound(key)

        logger.warning("upstream_error", key=key, cause=str(result.cause))
        raise UpstreamError(key, result.cause if isinstance(result.cause, Exception) else None)

    async def replace(self, key: str, data: bytes) -> None:
        """Store an image directly, overwriting any cached entry.

        Raises:
            CacheStoreError: If the entry cannot be written
        """
        await self._store.write(key, data)
        logger.info("image_replaced", key=key, bytes=len(data))

    async def remove(self, key: str) -> None:
        """Delete the cached entry for a key.

        Raises:
            CacheEntryNotFound: If nothing is cached for the key
            CacheStoreError: If the entry cannot be deleted
        """
        await self._store.delete(key)
        logger.info("image_removed", key=key)

    async def _populate(self, key: str, data: bytes) -> None:
        try:
            await self._store.write(key, data)
        except CacheStoreError as exc:
            logger.warning("cache_populate_failed", key=key, error=str(exc), exc_info=exc)
        else:
            logger.info("cache_populated", key=key, bytes=len(data))

    @property
    def cache_store(self) -> CacheStore:
        """Get the underlying cache store (for testing)."""
        return self._store

    @property
    def fetcher(self) -> ImageFetcher:
        """Get the underlying fetcher (for testing)."""
        return self._fetcher
