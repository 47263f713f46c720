"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from terrain_progress.db import ProgramRepository, init_db
from terrain_progress.models.localized import LocalizedText
from terrain_progress.models.program import Program, ProgramDay
from terrain_progress.utils.dates import CalendarClock


class MutableClock(CalendarClock):
    """Clock whose current instant can be moved by tests."""

    def __init__(self, now: datetime):
        object.__setattr__(self, "current", now)
        super().__init__(tz=now.tzinfo or timezone.utc, now_fn=lambda: self.current)

    def set(self, now: datetime) -> None:
        object.__setattr__(self, "current", now)


@pytest.fixture
def temp_db_path():
    """Create a temporary database path with the schema in place."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        asyncio.run(init_db(db_path))
        yield db_path


@pytest.fixture
def fixed_clock():
    """Clock frozen at 2024-01-04 10:00 UTC."""
    return CalendarClock.fixed(datetime(2024, 1, 4, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def moving_clock():
    """Clock starting at 2024-01-01 09:00 UTC that tests can advance."""
    return MutableClock(datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def sample_program():
    """A three-day program."""
    return Program(
        id="three-day-reset",
        title=LocalizedText.english("3-Day Reset"),
        duration_days=3,
        days=[
            ProgramDay(day=1, routine_refs=["routine_a"], movement_refs=["move_a"], lesson_ref="lesson_a"),
            ProgramDay(day=2, routine_refs=["routine_b"]),
            ProgramDay(day=3, routine_refs=["routine_a"], movement_refs=["move_b"]),
        ],
        tags=["reset"],
    )


@pytest.fixture
def long_program():
    """A ten-day program with one routine per day."""
    return Program(
        id="ten-day-warmth",
        title=LocalizedText.english("10 Days of Warmth"),
        duration_days=10,
        days=[ProgramDay(day=d, routine_refs=[f"routine_{d}"]) for d in range(1, 11)],
        terrain_fit=["cold_deficient_low_flame"],
    )


@pytest.fixture
def seeded_db(temp_db_path, sample_program, long_program):
    """Database with both sample programs in the catalog."""
    asyncio.run(ProgramRepository(temp_db_path).upsert_many([sample_program, long_program]))
    return temp_db_path
