"""Dependency wiring for the FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Settings stored in app.state by the app factory
    - Repositories, service, handler and router built during lifespan
    - Dependency functions retrieve from request.app.state
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request

from cat_cache.config import Settings
from cat_cache.handlers import ImageHandler, RequestRouter
from cat_cache.repositories import FileCacheRepository, HttpImageFetcher
from cat_cache.services import ImageService

logger = structlog.get_logger("cat_cache.api")


def get_router(request: Request) -> RequestRouter:
    """Retrieve the RequestRouter from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The RequestRouter instance from app.state

    Raises:
        RuntimeError: If the router is not initialized
    """
    router = getattr(request.app.state, "router", None)
    if router is None:
        raise RuntimeError("RequestRouter not initialized. Check lifespan setup.")
    return router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Cache store and fetcher (data access), unless injected by the factory
    2. Image service (business logic)
    3. Image handler and request router (HTTP)

    Cleanup:
        Closes the fetcher and removes the service and router from app.state
        on shutdown. The repositories stay so the app can be started again.
    """
    settings: Settings = app.state.settings

    cache_store = getattr(app.state, "cache_store", None) or FileCacheRepository.create(settings)
    fetcher = getattr(app.state, "fetcher", None) or HttpImageFetcher.create(settings)

    image_service = ImageService.create(cache_store=cache_store, fetcher=fetcher)
    handler = ImageHandler(image_service=image_service, max_body_bytes=settings.max_body_bytes)

    app.state.cache_store = cache_store
    app.state.fetcher = fetcher
    app.state.image_service = image_service
    app.state.router = RequestRouter(handler)

    logger.info(
        "image_cache_initialized",
        cache_dir=str(settings.cache_dir),
        upstream_url=settings.upstream_url,
        max_body_bytes=settings.max_body_bytes,
    )

    try:
        yield
    finally:
        await fetcher.close()
        del app.state.router
        del app.state.image_service
        logger.info("image_cache_shut_down")
