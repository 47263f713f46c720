"""Database engine setup and initialization."""

import logging
from pathlib import Path

import aiosqlite

from ..settings import get_settings

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_settings().data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "terrain_progress.db"


async def _run_migrations(db: aiosqlite.Connection) -> None:
    """Run database migrations for schema updates."""
    # Daily logs created before effort levels were tracked
    cursor = await db.execute("PRAGMA table_info(daily_logs)")
    columns = await cursor.fetchall()
    column_names = {col[1] for col in columns}

    if "routine_level" not in column_names:
        await db.execute("ALTER TABLE daily_logs ADD COLUMN routine_level TEXT")
    if "notes" not in column_names:
        await db.execute("ALTER TABLE daily_logs ADD COLUMN notes TEXT DEFAULT ''")

    await db.commit()


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Catalog programs (imported from content packs)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS programs (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                duration_days INTEGER NOT NULL,
                data TEXT NOT NULL,
                imported_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Program enrollments
        await db.execute("""
            CREATE TABLE IF NOT EXISTS enrollments (
                id TEXT PRIMARY KEY,
                program_id TEXT NOT NULL,
                start_date TEXT NOT NULL,
                current_day INTEGER DEFAULT 1,
                day_completions TEXT DEFAULT '[]',
                is_active INTEGER DEFAULT 1,
                completed_at TIMESTAMP,
                created_at TIMESTAMP NOT NULL,
                updated_at TIMESTAMP NOT NULL
            )
        """)

        # Daily activity logs, one per local calendar date
        await db.execute("""
            CREATE TABLE IF NOT EXISTS daily_logs (
                date TEXT PRIMARY KEY,
                completed_routine_ids TEXT DEFAULT '[]',
                completed_movement_ids TEXT DEFAULT '[]',
                routine_level TEXT,
                notes TEXT DEFAULT '',
                created_at TIMESTAMP NOT NULL,
                updated_at TIMESTAMP NOT NULL
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_enrollments_active
            ON enrollments(is_active)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_enrollments_program
            ON enrollments(program_id)
        """)

        await db.commit()

        # Run migrations for existing databases
        await _run_migrations(db)

    logger.info("Database initialized at %s", db_path)
