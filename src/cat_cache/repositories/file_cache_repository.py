"""Local directory implementation of CacheStore.

Each key maps to a single file ``<cache_dir>/<key>.jpg``. Blocking filesystem
calls run in a worker thread so one slow disk operation never stalls other
requests on the event loop.
"""

import asyncio
import os
import tempfile
from pathlib import Path

import structlog

from cat_cache.config import IMAGE_EXTENSION, Settings
from cat_cache.exceptions import CacheEntryNotFound, CacheStoreError, InvalidKey

logger = structlog.get_logger("cat_cache.repositories.file_cache")


class FileCacheRepository:
    """Flat-directory implementation of the CacheStore protocol.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Writes go to a temporary file in the cache directory and are renamed onto
    the target, so a concurrent reader sees either the old entry or the new
    one, never a partial file. There is no application-level locking: two
    writers for the same key resolve as last-write-wins.
    """

    def __init__(self, cache_dir: Path | str) -> None:
        """Initialize the repository.

        Args:
            cache_dir: Directory holding one file per key. Created lazily on
                first write.
        """
        self._cache_dir = Path(cache_dir)

    @classmethod
    def create(cls, settings: Settings) -> "FileCacheRepository":
        """Factory method to create a repository from settings.

        Args:
            settings: Application settings providing ``cache_dir``

        Returns:
            Configured FileCacheRepository
        """
        return cls(cache_dir=settings.cache_dir)

    @property
    def cache_dir(self) -> Path:
        """Directory backing the cache."""
        return self._cache_dir

    def path_for(self, key: str) -> Path:
        """Derive the file path for a key.

        Args:
            key: The resource key

        Returns:
            Absolute path of the cache entry

        Raises:
            InvalidKey: If the key is empty or escapes the cache directory
        """
        if not key or "/" in key or "\\" in key or "\x00" in key:
            raise InvalidKey(key)
        root = self._cache_dir.resolve()
        candidate = (root / f"{key}{IMAGE_EXTENSION}").resolve(strict=False)
        if candidate.parent != root:
            raise InvalidKey(key)
        return candidate

    async def exists(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            return await asyncio.to_thread(path.is_file)
        except OSError as exc:
            raise CacheStoreError(f"Error checking cached image {key}", original_error=exc) from exc

    async def read(self, key: str) -> bytes:
        path = self.path_for(key)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError as exc:
            raise CacheEntryNotFound(key) from exc
        except OSError as exc:
            raise CacheStoreError(f"Error reading cached image {key}", original_error=exc) from exc

    async def write(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        try:
            await asyncio.to_thread(self._write_atomic, path, data)
        except OSError as exc:
            raise CacheStoreError(f"Error saving image {key}", original_error=exc) from exc
        logger.debug("cache_entry_written", key=key, path=str(path), bytes=len(data))

    async def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError as exc:
            raise CacheEntryNotFound(key) from exc
        except OSError as exc:
            raise CacheStoreError(f"Error deleting cached image {key}", original_error=exc) from exc
        logger.debug("cache_entry_deleted", key=key, path=str(path))

    @staticmethod
    def _write_atomic(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as file_obj:
                file_obj.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
