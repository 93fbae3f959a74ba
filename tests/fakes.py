"""Test doubles shared across test modules."""

from cat_cache.entities import FetchResult, Found, NotFound, TransientError


class FakeFetcher:
    """In-memory ImageFetcher that counts calls per key."""

    def __init__(self, images: dict[str, bytes] | None = None) -> None:
        self.images = dict(images or {})
        self.failing: set[str] = set()
        self.calls: list[str] = []
        self.closed = False

    async def fetch(self, key: str) -> FetchResult:
        self.calls.append(key)
        if key in self.failing:
            return TransientError(ConnectionError("upstream unreachable"))
        if key in self.images:
            return Found(self.images[key])
        return NotFound()

    async def close(self) -> None:
        self.closed = True

    def call_count(self, key: str) -> int:
        return self.calls.count(key)
