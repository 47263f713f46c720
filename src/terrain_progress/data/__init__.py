"""Data loading utilities."""

from .content_pack import (
    ContentCatalog,
    load_content_pack,
    parse_content_pack,
    seed_programs_from_pack,
    validate_catalog,
)

__all__ = [
    "ContentCatalog",
    "load_content_pack",
    "parse_content_pack",
    "seed_programs_from_pack",
    "validate_catalog",
]
