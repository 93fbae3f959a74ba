"""Repository layer for data access.

This layer hides the filesystem and the upstream image provider behind the
protocols in ``cat_cache.protocols``. Implementations satisfy the protocols
structurally, not through inheritance.
"""

from cat_cache.protocols import CacheStore, ImageFetcher

from .file_cache_repository import FileCacheRepository
from .http_image_fetcher import HttpImageFetcher

__all__ = [
    "CacheStore",
    "ImageFetcher",
    "FileCacheRepository",
    "HttpImageFetcher",
]
