"""Tests for the command line interface."""

import pytest
from click.testing import CliRunner

from terrain_progress.cli import main
from terrain_progress.settings import get_settings


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("TERRAIN_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("TERRAIN_TIMEZONE", "UTC")
    get_settings.cache_clear()
    yield CliRunner()
    get_settings.cache_clear()


@pytest.fixture
def initialized(runner):
    result = runner.invoke(main, ["init"])
    assert result.exit_code == 0, result.output
    return runner


class TestInit:
    """Tests for the init command."""

    def test_init_seeds_catalog(self, runner, tmp_path):
        result = runner.invoke(main, ["init"])

        assert result.exit_code == 0
        assert "3 programs" in result.output
        assert (tmp_path / "data" / "terrain_progress.db").exists()

    def test_init_rejects_invalid_pack(self, runner, tmp_path):
        pack = tmp_path / "pack.json"
        pack.write_text(
            '{"programs": [{"id": "p", "title": "P", "duration_days": 1, '
            '"days": [{"day": 1, "routine_refs": ["missing"]}]}]}',
            encoding="utf-8",
        )
        result = runner.invoke(main, ["init", "--content-pack", str(pack)])

        assert result.exit_code == 1
        assert "unknown routine 'missing'" in result.output

    def test_commands_require_init(self, runner):
        result = runner.invoke(main, ["programs", "list"])

        assert result.exit_code == 1
        assert "not initialized" in result.output

    def test_invalid_timezone_configuration(self, runner, monkeypatch):
        monkeypatch.setenv("TERRAIN_TIMEZONE", "Mars/Olympus_Mons")
        get_settings.cache_clear()

        result = runner.invoke(main, ["programs", "list"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestProgramsCommands:
    """Tests for the programs group."""

    def test_list(self, initialized):
        result = initialized.invoke(main, ["programs", "list"])

        assert result.exit_code == 0
        assert "three-day-reset" in result.output
        assert "Total: 3 program(s)" in result.output

    def test_list_by_terrain(self, initialized):
        result = initialized.invoke(
            main, ["programs", "list", "--terrain", "warm_excess_overclocked"]
        )

        assert "five-day-cool-down" in result.output
        assert "seven-day-warmth" not in result.output

    def test_show(self, initialized):
        result = initialized.invoke(main, ["programs", "show", "three-day-reset"])

        assert result.exit_code == 0
        assert "Day 1: routines: warm-start-morning" in result.output

    def test_show_missing(self, initialized):
        result = initialized.invoke(main, ["programs", "show", "nope"])
        assert result.exit_code == 1


class TestProgressCommands:
    """Tests for the progress group."""

    def test_full_program(self, initialized):
        result = initialized.invoke(main, ["progress", "enroll", "three-day-reset", "--yes"])
        assert result.exit_code == 0
        assert "Day 1 of 3" in result.output

        result = initialized.invoke(main, ["progress", "complete-item", "warm-start-morning"])
        assert "Completed warm-start-morning" in result.output

        result = initialized.invoke(main, ["progress", "status"])
        assert "[x] warm-start-morning" in result.output
        assert "[ ] box-breathing" in result.output

        result = initialized.invoke(main, ["progress", "complete-day"])
        assert "Day 1 complete" in result.output

        result = initialized.invoke(main, ["progress", "complete-day", "--day", "3"])
        assert "complete!" in result.output

        result = initialized.invoke(main, ["progress", "history"])
        assert "Completed" in result.output

    def test_enroll_unknown_program(self, initialized):
        result = initialized.invoke(main, ["progress", "enroll", "nope", "--yes"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_replace_requires_confirmation(self, initialized):
        initialized.invoke(main, ["progress", "enroll", "three-day-reset", "--yes"])

        result = initialized.invoke(main, ["progress", "enroll", "seven-day-warmth"], input="n\n")

        assert "Cancelled" in result.output
        status = initialized.invoke(main, ["progress", "status"])
        assert "3-Day Reset" in status.output

    def test_complete_final_day_twice(self, initialized):
        initialized.invoke(main, ["progress", "enroll", "three-day-reset", "--yes"])
        initialized.invoke(main, ["progress", "complete-day", "--day", "3"])

        result = initialized.invoke(main, ["progress", "complete-day", "--day", "3"])

        assert result.exit_code == 0
        assert "Program already completed." in result.output

    def test_complete_day_out_of_range(self, initialized):
        initialized.invoke(main, ["progress", "enroll", "three-day-reset", "--yes"])

        result = initialized.invoke(main, ["progress", "complete-day", "--day", "5"])

        assert result.exit_code == 1
        assert "outside the program range 1-3" in result.output

    def test_status_without_enrollment(self, initialized):
        result = initialized.invoke(main, ["progress", "status"])
        assert "No active program" in result.output

    def test_unenroll(self, initialized):
        initialized.invoke(main, ["progress", "enroll", "three-day-reset", "--yes"])

        result = initialized.invoke(main, ["progress", "unenroll", "--yes"])

        assert "Left 3-Day Reset on day 1" in result.output
        history = initialized.invoke(main, ["progress", "history"])
        assert "Abandoned" in history.output


class TestActivityCommands:
    """Tests for the activity group."""

    def test_log_and_streak(self, initialized):
        initialized.invoke(main, ["activity", "log", "warm-start-morning", "--date", "2024-05-01"])
        result = initialized.invoke(
            main, ["activity", "log", "box-breathing", "--movement", "--date", "2024-05-02"]
        )
        assert "Logged box-breathing on 2024-05-02" in result.output

        result = initialized.invoke(main, ["activity", "streak"])
        assert "Longest: 2 days" in result.output
        assert "2024-05: 2" in result.output

    def test_calendar(self, initialized):
        initialized.invoke(main, ["activity", "log", "warm-start-morning", "--date", "2024-05-01"])

        result = initialized.invoke(main, ["activity", "calendar", "--year", "2024", "--month", "5"])

        assert result.exit_code == 0
        assert "May 2024" in result.output
        assert "1 day(s) completed this month" in result.output

    def test_calendar_invalid_month(self, initialized):
        result = initialized.invoke(main, ["activity", "calendar", "--year", "2024", "--month", "13"])
        assert result.exit_code == 1
