"""Content pack loader.

A content pack is a JSON document holding the catalog: programs plus the
routines, movements and lessons their days reference. Only programs are
modelled in full; other content is indexed by id so references can be
checked.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..db.engine import get_db_path
from ..db.repositories import ProgramRepository
from ..errors import ContentPackError
from ..models.localized import LocalizedText
from ..models.program import Program
from ..settings import get_settings

logger = logging.getLogger(__name__)

CONTENT_KINDS = ("routines", "movements", "lessons")


@dataclass
class ContentCatalog:
    """Read-only view of a loaded content pack."""

    version: str = ""
    default_locale: str = "en-US"
    programs: list[Program] = field(default_factory=list)
    content_titles: dict[str, dict[str, LocalizedText]] = field(default_factory=dict)

    def has_content(self, kind: str, content_id: str) -> bool:
        return content_id in self.content_titles.get(kind, {})


def get_content_pack_path() -> Path:
    """Get the configured content pack path."""
    return get_settings().content_pack_path


def parse_content_pack(data: dict) -> ContentCatalog:
    """Build a catalog from decoded content pack JSON.

    Raises:
        ContentPackError: If a content or program entry is malformed
    """
    meta = data.get("pack", {})
    catalog = ContentCatalog(
        version=meta.get("version", ""),
        default_locale=meta.get("default_locale", "en-US"),
    )

    problems = []
    for kind in CONTENT_KINDS:
        titles = {}
        for index, entry in enumerate(data.get(kind, [])):
            if not isinstance(entry, dict) or not entry.get("id"):
                problems.append(f"Entry {index} of '{kind}' has no id")
                continue
            titles[entry["id"]] = LocalizedText.from_value(entry.get("title"))
        catalog.content_titles[kind] = titles

    for raw in data.get("programs", []):
        try:
            catalog.programs.append(Program.from_dict(raw))
        except (KeyError, TypeError) as e:
            problems.append(f"Program '{raw.get('id', 'unknown')}' is malformed: {e}")
    if problems:
        raise ContentPackError("Content pack has malformed entries", problems)

    return catalog


def load_content_pack(path: Path | None = None) -> ContentCatalog:
    """Load and parse a content pack file.

    Raises:
        ContentPackError: If the file is missing or not valid JSON
    """
    path = path or get_content_pack_path()
    if not path.exists():
        raise ContentPackError(f"Content pack not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ContentPackError(f"Failed to parse content pack {path}: {e}") from e

    catalog = parse_content_pack(data)
    logger.info(
        "Loaded content pack %s (version %s, %d programs)",
        path.name,
        catalog.version or "unknown",
        len(catalog.programs),
    )
    return catalog


def validate_catalog(catalog: ContentCatalog) -> list[str]:
    """Check program definitions and their references.

    Returns:
        Human-readable problems; empty when the catalog is consistent
    """
    problems = []
    seen_ids = set()

    for program in catalog.programs:
        if program.id in seen_ids:
            problems.append(f"Duplicate program id '{program.id}'")
        seen_ids.add(program.id)

        if program.duration_days <= 0:
            problems.append(
                f"Program '{program.id}' has invalid duration {program.duration_days}"
            )
            continue

        seen_days = set()
        for day in program.days:
            if day.day < 1 or day.day > program.duration_days:
                problems.append(
                    f"Program '{program.id}' day {day.day} is outside 1-{program.duration_days}"
                )
            if day.day in seen_days:
                problems.append(f"Program '{program.id}' defines day {day.day} twice")
            seen_days.add(day.day)

            for ref in day.routine_refs:
                if not catalog.has_content("routines", ref):
                    problems.append(
                        f"Program '{program.id}' day {day.day} references unknown routine '{ref}'"
                    )
            for ref in day.movement_refs:
                if not catalog.has_content("movements", ref):
                    problems.append(
                        f"Program '{program.id}' day {day.day} references unknown movement '{ref}'"
                    )
            if day.lesson_ref and not catalog.has_content("lessons", day.lesson_ref):
                problems.append(
                    f"Program '{program.id}' day {day.day} references unknown lesson "
                    f"'{day.lesson_ref}'"
                )

    return problems


async def seed_programs_from_pack(
    db_path: Path | None = None, pack_path: Path | None = None
) -> int:
    """Load a content pack, validate it and store its programs.

    Args:
        db_path: Optional database path. Uses default if not provided.
        pack_path: Optional content pack path. Uses settings if not provided.

    Returns:
        Number of programs stored

    Raises:
        ContentPackError: If the pack cannot be loaded or fails validation
    """
    if db_path is None:
        db_path = get_db_path()

    catalog = load_content_pack(pack_path)
    problems = validate_catalog(catalog)
    if problems:
        raise ContentPackError("Content pack failed validation", problems)

    count = await ProgramRepository(db_path).upsert_many(catalog.programs)
    logger.info("Seeded %d programs", count)
    return count
