"""FastAPI application for the image cache."""

from .app import create_app

__all__ = ["create_app"]
