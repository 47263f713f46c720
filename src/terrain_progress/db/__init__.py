"""Database layer for terrain-progress."""

from .engine import get_db_path, init_db
from .repositories import (
    DailyLogRepository,
    EnrollmentRepository,
    ProgramRepository,
)

__all__ = [
    "DailyLogRepository",
    "EnrollmentRepository",
    "get_db_path",
    "init_db",
    "ProgramRepository",
]
