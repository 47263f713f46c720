"""Services for terrain-progress."""

from .activity import ActivityService
from .enrollment import ActiveProgram, DayPlan, EnrollmentService, build_day_plan
from .streaks import build_calendar_month, compute_streaks, monthly_completions

__all__ = [
    "ActiveProgram",
    "ActivityService",
    "build_calendar_month",
    "build_day_plan",
    "compute_streaks",
    "DayPlan",
    "EnrollmentService",
    "monthly_completions",
]
