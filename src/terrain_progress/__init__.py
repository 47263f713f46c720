"""terrain-progress: multi-day wellness program tracking."""

__version__ = "0.1.0"
