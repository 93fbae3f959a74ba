"""
Cat Cache Exceptions

Every failure raised by the router, handlers, services or repositories
derives from CatCacheError and carries the HTTP status it maps to.
The API layer converts them into plain-text responses.
"""

from typing import Optional


class CatCacheError(Exception):
    """Base exception for cat cache errors.

    Attributes:
        message: Human-readable message used as the response body
        status_code: HTTP status code the error maps to
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class BadRequest(CatCacheError):
    """Raised when the request path or body is malformed."""

    status_code = 400


class InvalidKey(BadRequest):
    """Raised when a resource key cannot be mapped into the cache directory."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Invalid key: {key!r}")


class PayloadTooLarge(BadRequest):
    """Raised when a request body exceeds the configured ceiling."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Request body exceeds {limit} bytes")


class MethodNotAllowed(CatCacheError):
    """Raised for verbs outside the routing table."""

    status_code = 405

    def __init__(self, method: str, allowed: tuple[str, ...]):
        self.method = method
        self.allowed = allowed
        super().__init__(f"Method {method} not allowed")


class ImageNotFound(CatCacheError):
    """Raised when an image is neither cached nor available upstream."""

    status_code = 404

    def __init__(self, key: str, message: Optional[str] = None):
        self.key = key
        super().__init__(message or f"Image {key} not found")


class CacheEntryNotFound(ImageNotFound):
    """Raised by the cache store when no entry exists for a key."""

    def __init__(self, key: str):
        super().__init__(key, f"No cached image for {key}")


class CacheStoreError(CatCacheError):
    """Raised when the cache directory cannot be read or written."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        # Preserve exception context for debugging
        if original_error:
            self.__cause__ = original_error


class UpstreamError(CatCacheError):
    """Raised when the remote image provider fails transiently."""

    def __init__(self, key: str, cause: Optional[Exception] = None):
        self.key = key
        super().__init__(f"Error fetching image {key}")
        if cause:
            self.__cause__ = cause
