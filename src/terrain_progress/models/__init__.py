"""Data models for terrain-progress."""

from .daily_log import DailyActivity, DailyLog, RoutineLevel
from .enrollment import (
    CompletionMilestone,
    DayCompletionRecord,
    EnrollmentState,
    ProgramEnrollment,
    compute_current_day,
)
from .localized import LocalizedText
from .program import Program, ProgramDay
from .progress import CalendarDay, CalendarMonth, DayMark, StreakSummary

__all__ = [
    "CalendarDay",
    "CalendarMonth",
    "CompletionMilestone",
    "compute_current_day",
    "DailyActivity",
    "DailyLog",
    "DayCompletionRecord",
    "DayMark",
    "EnrollmentState",
    "LocalizedText",
    "Program",
    "ProgramDay",
    "ProgramEnrollment",
    "RoutineLevel",
    "StreakSummary",
]
