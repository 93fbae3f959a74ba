"""Protocol interfaces for swappable implementations.

Protocols enable:
- Swapping the disk cache or upstream provider without touching services
- Unit testing with fake implementations
"""

from .cache_store import CacheStore
from .image_fetcher import ImageFetcher

__all__ = [
    "CacheStore",
    "ImageFetcher",
]
