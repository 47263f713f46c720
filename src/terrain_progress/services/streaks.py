"""Streak, total and calendar aggregation over daily activity.

These functions are pure: they read a history of ``DailyActivity`` entries
and never mutate it. The history is conventionally most-recent-first, but
the results do not depend on ordering. When a date appears more than once
it counts as completed if any entry for it is.
"""

import calendar
from collections.abc import Iterable
from datetime import date

from ..models.daily_log import DailyActivity
from ..models.progress import CalendarDay, CalendarMonth, DayMark, StreakSummary
from ..utils.dates import month_key, previous_day


def _completed_dates(activities: Iterable[DailyActivity]) -> tuple[set[date], set[date]]:
    logged: set[date] = set()
    completed: set[date] = set()
    for activity in activities:
        logged.add(activity.date)
        if activity.completed:
            completed.add(activity.date)
    return logged, completed


def _longest_run(completed: set[date]) -> int:
    longest = 0
    run = 0
    last: date | None = None
    for day in sorted(completed):
        if last is not None and (day - last).days == 1:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last = day
    return longest


def compute_streaks(
    activities: Iterable[DailyActivity], today: date | None = None
) -> StreakSummary:
    """Compute current streak, longest streak and total completions.

    The current streak walks backward one calendar day at a time and stops
    at the first date that is missing or not completed. With ``today``
    given, the walk starts at today, or at yesterday when today has no
    completion yet, so an unfinished today does not break the streak.
    Without ``today`` it starts at the most recently logged date.

    Args:
        activities: Daily activity history
        today: Current local date, if known

    Returns:
        StreakSummary for the history
    """
    logged, completed = _completed_dates(activities)
    if not completed:
        return StreakSummary()

    if today is None:
        anchor = max(logged)
    elif today in completed:
        anchor = today
    else:
        anchor = previous_day(today)

    current = 0
    while anchor in completed:
        current += 1
        anchor = previous_day(anchor)

    return StreakSummary(
        current_streak=current,
        longest_streak=_longest_run(completed),
        total_completions=len(completed),
        last_completion_date=max(completed),
    )


def monthly_completions(activities: Iterable[DailyActivity]) -> dict[str, int]:
    """Completed-day counts keyed by ``YYYY-MM``, in month order."""
    _, completed = _completed_dates(activities)
    counts: dict[str, int] = {}
    for day in sorted(completed):
        key = month_key(day)
        counts[key] = counts.get(key, 0) + 1
    return counts


def leading_blank_cells(year: int, month: int, first_weekday: int = calendar.SUNDAY) -> int:
    """Empty grid cells before the 1st of the month.

    ``first_weekday`` uses the ``calendar`` module constants (``MONDAY`` = 0,
    ``SUNDAY`` = 6). With a Sunday-first grid, a month starting on a
    Wednesday has 3 blanks.
    """
    first = date(year, month, 1)
    return (first.weekday() - first_weekday) % 7


def build_calendar_month(
    year: int,
    month: int,
    activities: Iterable[DailyActivity],
    today: date | None = None,
    first_weekday: int = calendar.SUNDAY,
) -> CalendarMonth:
    """Lay out a month with each day marked completed, today or plain.

    A completed day stays ``COMPLETED`` even when it is today; ``is_today``
    still flags it.

    Raises:
        ValueError: If ``month`` is not in 1-12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {month}")

    _, completed = _completed_dates(activities)
    _, days_in_month = calendar.monthrange(year, month)

    days = []
    for day_number in range(1, days_in_month + 1):
        day = date(year, month, day_number)
        is_today = day == today
        if day in completed:
            mark = DayMark.COMPLETED
        elif is_today:
            mark = DayMark.TODAY
        else:
            mark = DayMark.PLAIN
        days.append(CalendarDay(date=day, mark=mark, is_today=is_today))

    return CalendarMonth(
        year=year,
        month=month,
        leading_blanks=leading_blank_cells(year, month, first_weekday),
        days=days,
    )
