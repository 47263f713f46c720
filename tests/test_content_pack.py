"""Tests for content pack loading and validation."""

import asyncio
import json

import pytest

from terrain_progress.data import (
    load_content_pack,
    parse_content_pack,
    seed_programs_from_pack,
    validate_catalog,
)
from terrain_progress.db import ProgramRepository
from terrain_progress.errors import ContentPackError
from terrain_progress.settings import BUNDLED_CONTENT_PACK


def pack(programs, routines=("r1",), movements=("m1",), lessons=("l1",)) -> dict:
    return {
        "pack": {"version": "test"},
        "routines": [{"id": r, "title": r.upper()} for r in routines],
        "movements": [{"id": m, "title": m.upper()} for m in movements],
        "lessons": [{"id": lesson, "title": lesson.upper()} for lesson in lessons],
        "programs": programs,
    }


class TestBundledPack:
    """The content pack shipped with the package."""

    def test_loads(self):
        catalog = load_content_pack(BUNDLED_CONTENT_PACK)

        assert catalog.version == "1.0.0"
        assert {p.id for p in catalog.programs} == {
            "three-day-reset",
            "seven-day-warmth",
            "five-day-cool-down",
        }

    def test_validates_cleanly(self):
        catalog = load_content_pack(BUNDLED_CONTENT_PACK)
        assert validate_catalog(catalog) == []

    def test_every_program_day_is_defined(self):
        catalog = load_content_pack(BUNDLED_CONTENT_PACK)
        for program in catalog.programs:
            assert sorted(d.day for d in program.days) == list(range(1, program.duration_days + 1))


class TestValidateCatalog:
    """Tests for validate_catalog."""

    def test_unknown_references(self):
        catalog = parse_content_pack(
            pack(
                [
                    {
                        "id": "p",
                        "title": "P",
                        "duration_days": 1,
                        "days": [
                            {
                                "day": 1,
                                "routine_refs": ["r1", "r9"],
                                "movement_refs": ["m9"],
                                "lesson_ref": "l9",
                            }
                        ],
                    }
                ]
            )
        )
        problems = validate_catalog(catalog)

        assert len(problems) == 3
        assert any("unknown routine 'r9'" in p for p in problems)
        assert any("unknown movement 'm9'" in p for p in problems)
        assert any("unknown lesson 'l9'" in p for p in problems)

    def test_day_outside_duration(self):
        catalog = parse_content_pack(
            pack([{"id": "p", "title": "P", "duration_days": 2, "days": [{"day": 3}]}])
        )
        assert validate_catalog(catalog) == ["Program 'p' day 3 is outside 1-2"]

    def test_duplicate_day(self):
        catalog = parse_content_pack(
            pack([{"id": "p", "title": "P", "duration_days": 2, "days": [{"day": 1}, {"day": 1}]}])
        )
        assert validate_catalog(catalog) == ["Program 'p' defines day 1 twice"]

    def test_invalid_duration(self):
        catalog = parse_content_pack(pack([{"id": "p", "title": "P", "duration_days": 0}]))
        assert validate_catalog(catalog) == ["Program 'p' has invalid duration 0"]

    def test_duplicate_program(self):
        program = {"id": "p", "title": "P", "duration_days": 1}
        catalog = parse_content_pack(pack([program, program]))
        assert validate_catalog(catalog) == ["Duplicate program id 'p'"]


class TestLoadContentPack:
    """Tests for load_content_pack and parse_content_pack."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ContentPackError, match="not found"):
            load_content_pack(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "pack.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ContentPackError, match="Failed to parse"):
            load_content_pack(path)

    def test_malformed_program(self):
        with pytest.raises(ContentPackError) as exc_info:
            parse_content_pack(pack([{"id": "p", "title": "P"}]))

        assert len(exc_info.value.problems) == 1
        assert "'p'" in exc_info.value.problems[0]

    def test_content_entry_without_id(self, tmp_path):
        data = pack([])
        data["routines"].append({"title": "Untitled"})
        data["lessons"].append("l2")

        with pytest.raises(ContentPackError) as exc_info:
            parse_content_pack(data)

        assert exc_info.value.problems == [
            "Entry 1 of 'routines' has no id",
            "Entry 1 of 'lessons' has no id",
        ]

        path = tmp_path / "pack.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        with pytest.raises(ContentPackError, match="malformed entries"):
            load_content_pack(path)


class TestSeedPrograms:
    """Tests for seed_programs_from_pack."""

    def test_seeds_bundled_pack(self, temp_db_path):
        count = asyncio.run(seed_programs_from_pack(temp_db_path, BUNDLED_CONTENT_PACK))
        programs = asyncio.run(ProgramRepository(temp_db_path).list_all())

        assert count == 3
        assert [p.duration_days for p in programs] == [3, 5, 7]

    def test_refuses_invalid_pack(self, temp_db_path, tmp_path):
        path = tmp_path / "pack.json"
        path.write_text(
            json.dumps(pack([{"id": "p", "title": "P", "duration_days": 1, "days": [{"day": 2}]}])),
            encoding="utf-8",
        )

        with pytest.raises(ContentPackError, match="failed validation"):
            asyncio.run(seed_programs_from_pack(temp_db_path, path))

        assert asyncio.run(ProgramRepository(temp_db_path).list_all()) == []
