"""Cache storage protocol.

Defines the interface for any backend that persists image bytes under a
resource key. The default implementation is a flat directory on local disk.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for image cache backends.

    Any type that implements these coroutines satisfies the protocol,
    no explicit inheritance needed. Implementations do no locking of their
    own: concurrent writers to the same key resolve as last-write-wins.

    Example:
        ```python
        from cat_cache.protocols import CacheStore

        store: CacheStore = FileCacheRepository.create(settings)
        ```
    """

    async def exists(self, key: str) -> bool:
        """Check whether an entry exists for the key.

        Args:
            key: The resource key

        Returns:
            True if an entry is present, False otherwise
        """
        ...

    async def read(self, key: str) -> bytes:
        """Read the full entry for the key.

        Args:
            key: The resource key

        Returns:
            The stored bytes

        Raises:
            CacheEntryNotFound: If no entry exists
            CacheStoreError: On any other read failure
        """
        ...

    async def write(self, key: str, data: bytes) -> None:
        """Store bytes under the key, replacing any existing entry.

        Args:
            key: The resource key
            data: The bytes to store

        Raises:
            CacheStoreError: If the entry cannot be written
        """
        ...

    async def delete(self, key: str) -> None:
        """Remove the entry for the key.

        Args:
            key: The resource key

        Raises:
            CacheEntryNotFound: If no entry exists
            CacheStoreError: On any other failure
        """
        ...
