"""Shared fixtures for the cat cache tests."""

import pytest
from fastapi.testclient import TestClient

from cat_cache.api import create_app
from cat_cache.config import Settings
from cat_cache.repositories import FileCacheRepository
from tests.fakes import FakeFetcher


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def settings(cache_dir):
    return Settings(host="127.0.0.1", port=8080, cache_dir=cache_dir, upstream_url="http://upstream.test")


@pytest.fixture
def fetcher():
    return FakeFetcher({"200": b"\xff\xd8ok-cat", "404": b"\xff\xd8lost-cat"})


@pytest.fixture
def cache_store(cache_dir):
    return FileCacheRepository(cache_dir)


@pytest.fixture
def client(settings, cache_store, fetcher):
    """Create a test client with a fake upstream."""
    app = create_app(settings, cache_store=cache_store, fetcher=fetcher)
    with TestClient(app) as test_client:
        yield test_client
