"""Cat Cache - read-through image cache for http.cat pictures.

Images are keyed by HTTP status code, served from a local directory and
fetched from the upstream provider on a miss.

Layers:
    - protocols: Interface contracts (CacheStore, ImageFetcher)
    - repositories: Filesystem cache and HTTP fetcher implementations
    - services: Read-through, replace and remove logic
    - handlers: HTTP handlers and the verb-indexed router
    - entities: Domain models (fetch results)

Usage:
    ```python
    from cat_cache import Settings, create_app

    app = create_app(Settings(host="127.0.0.1", port=8080, cache_dir="./cache"))
    ```

From the command line:
    ```
    python -m cat_cache -h 127.0.0.1 -p 8080 -c ./cache
    ```
"""

from cat_cache.api import create_app
from cat_cache.config import Settings, get_settings
from cat_cache.entities import FetchResult, Found, NotFound, TransientError
from cat_cache.handlers import ImageHandler, RequestRouter
from cat_cache.protocols import CacheStore, ImageFetcher
from cat_cache.repositories import FileCacheRepository, HttpImageFetcher
from cat_cache.services import ImageService

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Application
    "create_app",
    # Protocols (interfaces)
    "CacheStore",
    "ImageFetcher",
    # Services (business logic)
    "ImageService",
    # Handlers (HTTP)
    "ImageHandler",
    "RequestRouter",
    # Repositories (data access)
    "FileCacheRepository",
    "HttpImageFetcher",
    # Entities (domain models)
    "FetchResult",
    "Found",
    "NotFound",
    "TransientError",
]
