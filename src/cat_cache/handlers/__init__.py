"""Handler layer for HTTP endpoints.

Handlers depend on services (business logic), not directly on repositories.
The router picks a handler by verb and extracts the resource key.

Architecture:
    Router -> Handler -> Service -> Repository
"""

from .image_handler import ImageHandler
from .router import RequestRouter

__all__ = [
    "ImageHandler",
    "RequestRouter",
]
