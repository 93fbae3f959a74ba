import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse

from cat_cache.api.dependencies import get_router, lifespan
from cat_cache.config import Settings
from cat_cache.exceptions import CatCacheError, MethodNotAllowed
from cat_cache.protocols import CacheStore, ImageFetcher

logger = structlog.get_logger("cat_cache.api")

# Every verb reaches the RequestRouter, which owns the 405 decision
HTTP_METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT")


async def dispatch(request: Request) -> Response:
    """Catch-all endpoint: every path and verb goes through the RequestRouter."""
    return await get_router(request).dispatch(request)


async def handle_cat_cache_error(request: Request, exc: CatCacheError) -> Response:
    """Render a CatCacheError as a plain-text response with its status."""
    log_kwargs = {
        "method": request.method,
        "path": request.url.path,
        "status": exc.status_code,
        "error": exc.message,
    }
    if exc.status_code >= 500:
        logger.error("request_failed", **log_kwargs, exc_info=exc)
    else:
        logger.info("request_rejected", **log_kwargs)

    headers = None
    if isinstance(exc, MethodNotAllowed):
        headers = {"Allow": ", ".join(exc.allowed)}
    return PlainTextResponse(exc.message, status_code=exc.status_code, headers=headers)


def create_app(
    settings: Settings,
    cache_store: CacheStore | None = None,
    fetcher: ImageFetcher | None = None,
) -> FastAPI:
    """Build the image cache application.

    Args:
        settings: Immutable configuration for this server
        cache_store: Cache backend. Defaults to a FileCacheRepository on
            ``settings.cache_dir``.
        fetcher: Remote image provider. Defaults to an HttpImageFetcher on
            ``settings.upstream_url``.

    Returns:
        The configured FastAPI application
    """
    app = FastAPI(
        title="Cat Cache",
        description="Read-through cache for http.cat images keyed by status code",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.cache_store = cache_store
    app.state.fetcher = fetcher

    app.add_exception_handler(CatCacheError, handle_cat_cache_error)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):  # noqa: ANN001 - FastAPI middleware signature
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        log_kwargs = {
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": round(duration_ms, 2),
        }
        if response.status_code >= 500:
            logger.warning("http_request", **log_kwargs)
        else:
            logger.info("http_request", **log_kwargs)
        return response

    app.add_route("/{path:path}", dispatch, methods=list(HTTP_METHODS), include_in_schema=False)

    return app
