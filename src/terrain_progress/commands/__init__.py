"""CLI commands for terrain-progress."""

from .activity import activity
from .init import init
from .programs import programs
from .progress import progress
from .serve import serve

__all__ = [
    "activity",
    "init",
    "programs",
    "progress",
    "serve",
]
