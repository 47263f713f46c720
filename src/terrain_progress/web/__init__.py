"""HTTP API for terrain-progress."""

from .app import create_app

__all__ = ["create_app"]
