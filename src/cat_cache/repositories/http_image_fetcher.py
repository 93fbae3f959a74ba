"""HTTP image fetcher backed by http.cat.

Requests ``<upstream_url>/<key>.jpg`` and classifies the outcome:

- 2xx: Found with the response body
- 404: NotFound (the provider has no picture for this code)
- anything else, connection errors and timeouts: TransientError

The fetcher never retries; callers decide what to do with a transient error.
"""

import httpx
import structlog

from cat_cache.config import IMAGE_EXTENSION, Settings
from cat_cache.entities import FetchResult, Found, NotFound, TransientError

logger = structlog.get_logger("cat_cache.repositories.http_image_fetcher")


class HttpImageFetcher:
    """httpx-based implementation of the ImageFetcher protocol.

    Example:
        ```python
        fetcher = HttpImageFetcher.create(settings)
        result = await fetcher.fetch("404")
        await fetcher.close()
        ```
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            base_url: Provider base URL, e.g. ``https://http.cat``
            timeout: Request timeout in seconds
            client: Pre-built client (tests inject one with a mock transport)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    @classmethod
    def create(cls, settings: Settings) -> "HttpImageFetcher":
        """Factory method to create a fetcher from settings."""
        return cls(base_url=settings.upstream_url, timeout=settings.fetch_timeout)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    def url_for(self, key: str) -> str:
        return f"{self._base_url}/{key}{IMAGE_EXTENSION}"

    async def fetch(self, key: str) -> FetchResult:
        url = self.url_for(key)
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("upstream_request_failed", key=key, url=url, error=str(exc))
            return TransientError(exc)

        if response.status_code == httpx.codes.NOT_FOUND:
            return NotFound()
        if response.is_success:
            return Found(response.content)

        logger.warning("upstream_bad_status", key=key, url=url, status=response.status_code)
        return TransientError(f"upstream responded with HTTP {response.status_code}")

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
