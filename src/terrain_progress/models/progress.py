"""Streak and calendar progress models."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class DayMark(str, Enum):
    """How a calendar cell is rendered."""

    COMPLETED = "completed"
    TODAY = "today"
    PLAIN = "plain"


@dataclass(frozen=True)
class StreakSummary:
    """Aggregated streak state derived from the daily activity history."""

    current_streak: int = 0
    longest_streak: int = 0
    total_completions: int = 0
    last_completion_date: date | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "total_completions": self.total_completions,
            "last_completion_date": (
                self.last_completion_date.isoformat() if self.last_completion_date else None
            ),
        }


@dataclass(frozen=True)
class CalendarDay:
    date: date
    mark: DayMark
    is_today: bool = False

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "day": self.date.day,
            "mark": self.mark.value,
            "is_today": self.is_today,
        }


@dataclass
class CalendarMonth:
    """One month laid out for a seven-column grid.

    ``leading_blanks`` is the number of empty cells before the 1st, i.e. the
    weekday index of the 1st counted from the grid's first column.
    """

    year: int
    month: int
    leading_blanks: int
    days: list[CalendarDay] = field(default_factory=list)

    @property
    def completed_count(self) -> int:
        return sum(1 for day in self.days if day.mark == DayMark.COMPLETED)

    def weeks(self) -> list[list[CalendarDay | None]]:
        """Rows of seven cells, padded with ``None`` on both ends."""
        cells: list[CalendarDay | None] = [None] * self.leading_blanks
        cells.extend(self.days)
        while len(cells) % 7:
            cells.append(None)
        return [cells[i:i + 7] for i in range(0, len(cells), 7)]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "year": self.year,
            "month": self.month,
            "leading_blanks": self.leading_blanks,
            "completed_count": self.completed_count,
            "days": [day.to_dict() for day in self.days],
        }
