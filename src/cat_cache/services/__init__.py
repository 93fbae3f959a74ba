"""Service layer for business logic.

Services depend on protocols, not concrete implementations.

Architecture:
    Router -> Handler -> Service -> Repository
    (HTTP)  -> (HTTP)  -> (Business) -> (Data Access)
"""

from .image_service import ImageService

__all__ = [
    "ImageService",
]
