"""Image fetcher protocol.

Defines the interface for a remote source of images keyed by status code.
"""

from typing import Protocol, runtime_checkable

from cat_cache.entities import FetchResult


@runtime_checkable
class ImageFetcher(Protocol):
    """Protocol for remote image providers.

    Example:
        ```python
        from cat_cache.protocols import ImageFetcher

        fetcher: ImageFetcher = HttpImageFetcher.create(settings)
        ```
    """

    async def fetch(self, key: str) -> FetchResult:
        """Issue a single request for the image behind the key.

        Never raises for provider or network failures and never retries;
        the outcome is encoded in the returned result.

        Args:
            key: The resource key

        Returns:
            Found with the image bytes, NotFound, or TransientError
        """
        ...

    async def close(self) -> None:
        """Release any connections held by the fetcher."""
        ...
