"""Web layer for amelie."""

from .app import create_app

__all__ = ["create_app"]
