"""Data access layer for terrain-progress."""

import json
import logging
from datetime import date
from pathlib import Path

import aiosqlite

from ..errors import EnrollmentNotFoundError, TerrainProgressError
from ..models.daily_log import DailyLog, RoutineLevel
from ..models.enrollment import ProgramEnrollment
from ..models.program import Program
from ..utils.dates import CalendarClock, parse_date, parse_datetime
from .engine import get_db_path

logger = logging.getLogger(__name__)


class ProgramRepository:
    """Repository for catalog programs."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def upsert(self, program: Program) -> None:
        """Insert a program or replace the stored definition."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT OR REPLACE INTO programs (id, title, duration_days, data)
                VALUES (?, ?, ?, ?)
                """,
                (
                    program.id,
                    program.display_name,
                    program.duration_days,
                    json.dumps(program.to_dict()),
                ),
            )
            await db.commit()

    async def upsert_many(self, programs: list[Program]) -> int:
        """Insert or replace several programs in one transaction."""
        async with aiosqlite.connect(self.db_path) as db:
            for program in programs:
                await db.execute(
                    """
                    INSERT OR REPLACE INTO programs (id, title, duration_days, data)
                    VALUES (?, ?, ?, ?)
                    """,
                    (
                        program.id,
                        program.display_name,
                        program.duration_days,
                        json.dumps(program.to_dict()),
                    ),
                )
            await db.commit()
        return len(programs)

    async def get(self, program_id: str) -> Program | None:
        """Get a program by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM programs WHERE id = ?", (program_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_program(row)

    async def list_all(self) -> list[Program]:
        """List all programs, shortest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM programs ORDER BY duration_days, title"
            )
            rows = await cursor.fetchall()
            return [self._row_to_program(row) for row in rows]

    def _row_to_program(self, row: aiosqlite.Row) -> Program:
        """Convert a database row to a Program."""
        return Program.from_dict(json.loads(row["data"]))


class EnrollmentRepository:
    """Repository for program enrollments.

    Owns the rule that at most one enrollment is active at a time.
    """

    def __init__(self, db_path: Path | None = None, clock: CalendarClock | None = None):
        self.db_path = db_path or get_db_path()
        self.clock = clock or CalendarClock()

    async def create(self, enrollment: ProgramEnrollment) -> str:
        """Store a new enrollment."""
        data = enrollment.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO enrollments
                (id, program_id, start_date, current_day, day_completions,
                 is_active, completed_at, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["id"],
                    data["program_id"],
                    data["start_date"],
                    data["current_day"],
                    json.dumps(data["day_completions"]),
                    1 if data["is_active"] else 0,
                    data["completed_at"],
                    data["created_at"],
                    data["updated_at"],
                ),
            )
            await db.commit()
        return enrollment.id

    async def get(self, enrollment_id: str) -> ProgramEnrollment | None:
        """Get an enrollment by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM enrollments WHERE id = ?", (enrollment_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_enrollment(row)

    async def get_active(self) -> ProgramEnrollment | None:
        """Get the active enrollment, if any."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM enrollments WHERE is_active = 1 ORDER BY updated_at DESC LIMIT 1"
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_enrollment(row)

    async def list_all(self) -> list[ProgramEnrollment]:
        """List all enrollments, newest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM enrollments ORDER BY created_at DESC"
            )
            rows = await cursor.fetchall()
            return [self._row_to_enrollment(row) for row in rows]

    async def update(self, enrollment: ProgramEnrollment) -> None:
        """Save an enrollment verbatim."""
        data = enrollment.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE enrollments SET
                    current_day = ?, day_completions = ?, is_active = ?,
                    completed_at = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    data["current_day"],
                    json.dumps(data["day_completions"]),
                    1 if data["is_active"] else 0,
                    data["completed_at"],
                    data["updated_at"],
                    data["id"],
                ),
            )
            await db.commit()
            if cursor.rowcount == 0:
                raise EnrollmentNotFoundError(enrollment.id)

    async def activate(self, enrollment_id: str) -> None:
        """Make one enrollment the active one and deactivate all others.

        Raises:
            EnrollmentNotFoundError: If the enrollment does not exist
            TerrainProgressError: If the enrollment already finished its program
        """
        now = self.clock.now().isoformat()
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT completed_at FROM enrollments WHERE id = ?", (enrollment_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                raise EnrollmentNotFoundError(enrollment_id)
            if row["completed_at"]:
                raise TerrainProgressError(
                    f"Enrollment '{enrollment_id}' is completed and cannot be reactivated"
                )

            await db.execute(
                """
                UPDATE enrollments SET is_active = 0, updated_at = ?
                WHERE is_active = 1 AND id != ?
                """,
                (now, enrollment_id),
            )
            await db.execute(
                "UPDATE enrollments SET is_active = 1, updated_at = ? WHERE id = ?",
                (now, enrollment_id),
            )
            await db.commit()
        logger.info("Activated enrollment %s", enrollment_id)

    async def get_latest(self) -> ProgramEnrollment | None:
        """Get the most recently created enrollment, active or not."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM enrollments ORDER BY created_at DESC LIMIT 1"
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_enrollment(row)

    def _row_to_enrollment(self, row: aiosqlite.Row) -> ProgramEnrollment:
        """Convert a database row to a ProgramEnrollment."""
        data = dict(row)
        data["day_completions"] = json.loads(row["day_completions"] or "[]")
        return ProgramEnrollment.from_dict(data, clock=self.clock)


class DailyLogRepository:
    """Repository for daily activity logs."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get_by_date(self, day: date) -> DailyLog | None:
        """Get the log for a calendar date."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM daily_logs WHERE date = ?", (day.isoformat(),)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_log(row)

    async def upsert(self, log: DailyLog) -> None:
        """Create or replace the log for its date."""
        data = log.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT OR REPLACE INTO daily_logs
                (date, completed_routine_ids, completed_movement_ids,
                 routine_level, notes, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["date"],
                    json.dumps(data["completed_routine_ids"]),
                    json.dumps(data["completed_movement_ids"]),
                    data["routine_level"],
                    data["notes"],
                    data["created_at"],
                    data["updated_at"],
                ),
            )
            await db.commit()

    async def list_recent(self, limit: int | None = None) -> list[DailyLog]:
        """List logs most-recent-first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            if limit:
                cursor = await db.execute(
                    "SELECT * FROM daily_logs ORDER BY date DESC LIMIT ?", (limit,)
                )
            else:
                cursor = await db.execute("SELECT * FROM daily_logs ORDER BY date DESC")
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    async def list_between(self, start: date, end: date) -> list[DailyLog]:
        """List logs with ``start <= date <= end``, most-recent-first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM daily_logs
                WHERE date >= ? AND date <= ?
                ORDER BY date DESC
                """,
                (start.isoformat(), end.isoformat()),
            )
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    def _row_to_log(self, row: aiosqlite.Row) -> DailyLog:
        """Convert a database row to a DailyLog."""
        log = DailyLog(
            date=parse_date(row["date"]),
            completed_routine_ids=json.loads(row["completed_routine_ids"]),
            completed_movement_ids=json.loads(row["completed_movement_ids"]),
            routine_level=RoutineLevel(row["routine_level"]) if row["routine_level"] else None,
            notes=row["notes"] or "",
        )
        log.created_at = parse_datetime(row["created_at"]) or log.created_at
        log.updated_at = parse_datetime(row["updated_at"]) or log.updated_at
        return log
