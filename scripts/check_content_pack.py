#!/usr/bin/env python3
"""Check a content pack for broken program definitions.

Loads the pack, validates every program against the routines, movements
and lessons it ships, and prints a per-program overview.

Usage:
    python scripts/check_content_pack.py [PATH]

Defaults to the pack bundled with the package.
"""

import sys
from pathlib import Path

from terrain_progress.data import load_content_pack, validate_catalog
from terrain_progress.errors import ContentPackError
from terrain_progress.settings import BUNDLED_CONTENT_PACK


def main():
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else BUNDLED_CONTENT_PACK
    print(f"Checking content pack: {path}")

    try:
        catalog = load_content_pack(path)
    except ContentPackError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Version: {catalog.version or 'unknown'} (default locale {catalog.default_locale})")
    for kind, titles in catalog.content_titles.items():
        print(f"  {kind}: {len(titles)}")

    print("\nPrograms:")
    for program in catalog.programs:
        items = sum(len(day.item_ids) for day in program.days)
        print(f"  {program.id}: {program.duration_days} days, {items} items")

    problems = validate_catalog(catalog)
    if problems:
        print(f"\n{len(problems)} problem(s):")
        for problem in problems:
            print(f"  - {problem}")
        sys.exit(1)

    print("\nNo problems found")


if __name__ == "__main__":
    main()
