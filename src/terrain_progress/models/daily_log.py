"""Daily activity log models."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from ..utils.dates import parse_date, parse_datetime


class RoutineLevel(str, Enum):
    """Effort level of the daily routine."""

    FULL = "full"
    MEDIUM = "medium"
    LITE = "lite"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def duration_description(self) -> str:
        durations = {
            RoutineLevel.FULL: "10-15 min",
            RoutineLevel.MEDIUM: "5 min",
            RoutineLevel.LITE: "90 sec",
        }
        return durations[self]


@dataclass(frozen=True)
class DailyActivity:
    """One calendar date of the streak history."""

    date: date
    completed: bool
    level: RoutineLevel | None = None


@dataclass
class DailyLog:
    """What the user did on one local calendar date."""

    date: date
    completed_routine_ids: list[str] = field(default_factory=list)
    completed_movement_ids: list[str] = field(default_factory=list)
    routine_level: RoutineLevel | None = None
    notes: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_completed_routine(self) -> bool:
        """Whether any routine or movement was completed that day."""
        return bool(self.completed_routine_ids or self.completed_movement_ids)

    def mark_routine_complete(
        self, routine_id: str, level: RoutineLevel, now: datetime | None = None
    ) -> None:
        if routine_id not in self.completed_routine_ids:
            self.completed_routine_ids.append(routine_id)
        self.routine_level = level
        self.updated_at = now or datetime.now(timezone.utc)

    def mark_movement_complete(self, movement_id: str, now: datetime | None = None) -> None:
        if movement_id not in self.completed_movement_ids:
            self.completed_movement_ids.append(movement_id)
        self.updated_at = now or datetime.now(timezone.utc)

    def to_activity(self) -> DailyActivity:
        return DailyActivity(
            date=self.date,
            completed=self.has_completed_routine,
            level=self.routine_level,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "date": self.date.isoformat(),
            "completed_routine_ids": list(self.completed_routine_ids),
            "completed_movement_ids": list(self.completed_movement_ids),
            "routine_level": self.routine_level.value if self.routine_level else None,
            "notes": self.notes,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyLog":
        """Create from dictionary."""
        level = data.get("routine_level")
        log = cls(
            date=parse_date(data["date"]),
            completed_routine_ids=data.get("completed_routine_ids") or [],
            completed_movement_ids=data.get("completed_movement_ids") or [],
            routine_level=RoutineLevel(level) if level else None,
            notes=data.get("notes") or "",
        )
        created_at = parse_datetime(data.get("created_at"))
        updated_at = parse_datetime(data.get("updated_at"))
        if created_at:
            log.created_at = created_at
        if updated_at:
            log.updated_at = updated_at
        return log
