"""Domain entities for internal representation.

These are pure frozen dataclasses used by services and repositories.
They carry no HTTP or serialization logic.
"""

from .fetch_result import FetchResult, Found, NotFound, TransientError

__all__ = ["FetchResult", "Found", "NotFound", "TransientError"]
