import os
from pathlib import Path

import pytest

from cat_cache.exceptions import CacheEntryNotFound, CacheStoreError, InvalidKey
from cat_cache.repositories import CacheStore, FileCacheRepository


@pytest.fixture
def repo(tmp_path):
    return FileCacheRepository(tmp_path / "nested" / "cache")


def test_satisfies_protocol(repo):
    assert isinstance(repo, CacheStore)


@pytest.mark.asyncio
async def test_write_creates_directories_and_reads_back(repo):
    assert not repo.cache_dir.exists()
    await repo.write("200", b"image")

    assert await repo.exists("200")
    assert await repo.read("200") == b"image"
    assert (repo.cache_dir / "200.jpg").is_file()


@pytest.mark.asyncio
async def test_write_leaves_no_temporary_files(repo):
    await repo.write("200", b"one")
    await repo.write("200", b"two")

    assert sorted(os.listdir(repo.cache_dir)) == ["200.jpg"]
    assert await repo.read("200") == b"two"


@pytest.mark.asyncio
async def test_missing_entry(repo):
    assert not await repo.exists("404")
    with pytest.raises(CacheEntryNotFound):
        await repo.read("404")
    with pytest.raises(CacheEntryNotFound):
        await repo.delete("404")


@pytest.mark.asyncio
async def test_delete_removes_entry(repo):
    await repo.write("410", b"gone")
    await repo.delete("410")
    assert not await repo.exists("410")


@pytest.mark.asyncio
async def test_read_of_directory_is_store_error(repo):
    (repo.cache_dir / "500.jpg").mkdir(parents=True)
    with pytest.raises(CacheStoreError):
        await repo.read("500")


@pytest.mark.asyncio
async def test_write_into_unwritable_location_is_store_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_bytes(b"not a directory")
    repo = FileCacheRepository(blocker / "cache")

    with pytest.raises(CacheStoreError):
        await repo.write("200", b"image")


@pytest.mark.parametrize("key", ["", "a/b", "..\\x", "nul\x00"])
def test_path_for_rejects_unsafe_keys(repo, key):
    with pytest.raises(InvalidKey):
        repo.path_for(key)


def test_path_for_is_deterministic(repo):
    assert repo.path_for("418") == (repo.cache_dir / "418.jpg").resolve()
    assert repo.path_for("..").name == "...jpg"


@pytest.mark.asyncio
async def test_exists_permission_error_is_store_error(repo, monkeypatch):
    def denied(self):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(Path, "is_file", denied)
    with pytest.raises(CacheStoreError, match="Error checking cached image 200"):
        await repo.exists("200")
