"""Program enrollment tracking model.

An enrollment is a bookmark in a multi-day program: it remembers which
program the user is working through, which day they are on, and which items
they completed on each day.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from uuid import uuid4

from ..errors import InvalidDurationError, OutOfRangeDayError
from ..utils.dates import CalendarClock, days_between, parse_date, parse_datetime

logger = logging.getLogger(__name__)


class EnrollmentState(str, Enum):
    """Lifecycle state of an enrollment."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"  # deactivated by the host before the final day


class CompletionMilestone(str, Enum):
    """Outcome reported by ``ProgramEnrollment.mark_day_completed``."""

    NONE = "none"
    DAY_COMPLETED = "day_completed"
    PROGRAM_COMPLETED = "program_completed"


def validate_duration(duration_days: int) -> None:
    """Reject program lengths that are not a positive number of days."""
    if duration_days <= 0:
        raise InvalidDurationError(duration_days)


def validate_day(day: int, duration_days: int | None = None) -> None:
    """Reject day numbers outside ``[1, duration_days]``.

    Caller-supplied days are never clamped.
    """
    if day < 1:
        raise OutOfRangeDayError(day, duration_days)
    if duration_days is not None and day > duration_days:
        raise OutOfRangeDayError(day, duration_days)


def compute_current_day(
    start_date: date | datetime,
    duration_days: int,
    clock: CalendarClock | None = None,
) -> int:
    """Compute the program day the user should be on right now.

    Day 1 is the start date itself and the day increments once per local
    calendar day, capped at the program length. Start dates in the future
    yield day 1.

    Args:
        start_date: Date (or instant) the enrollment started
        duration_days: Program length in days
        clock: Calendar clock supplying the time zone and "now"

    Returns:
        Day number in ``[1, duration_days]``
    """
    validate_duration(duration_days)
    clock = clock or CalendarClock()

    # Calendar date subtraction, so DST shifts never change the count
    elapsed = days_between(clock.local_date(start_date), clock.today())
    return max(1, min(elapsed + 1, duration_days))


@dataclass
class DayCompletionRecord:
    """Items completed on one program day.

    ``completed_at`` records when tracking for the day began and is not
    updated as more items are added.
    """

    day: int
    completed_item_ids: list[str] = field(default_factory=list)
    completed_at: datetime | None = None

    def has_item(self, item_id: str) -> bool:
        return item_id in self.completed_item_ids

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "day": self.day,
            "completed_item_ids": list(self.completed_item_ids),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DayCompletionRecord":
        """Create from dictionary."""
        item_ids: list[str] = []
        for item_id in data.get("completed_item_ids", []):
            if item_id not in item_ids:
                item_ids.append(item_id)
        return cls(
            day=data["day"],
            completed_item_ids=item_ids,
            completed_at=parse_datetime(data.get("completed_at")),
        )


@dataclass
class ProgramEnrollment:
    """One user's attempt at a specific program.

    The enrollment is the only mutable entity of the progress core. All
    mutations stamp ``updated_at`` through ``_touch``. The host owns the
    "one active enrollment" rule; the enrollment itself only ever turns
    ``is_active`` off, when the final day is completed.
    """

    program_id: str
    start_date: date
    current_day: int = 1
    day_completions: list[DayCompletionRecord] = field(default_factory=list)
    is_active: bool = True
    completed_at: datetime | None = None
    id: str = field(default_factory=lambda: uuid4().hex)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    clock: CalendarClock = field(default_factory=CalendarClock, repr=False, compare=False)

    def __post_init__(self):
        if isinstance(self.start_date, datetime):
            self.start_date = self.clock.local_date(self.start_date)
        if self.created_at is None:
            self.created_at = self.clock.now()
        if self.updated_at is None:
            self.updated_at = self.created_at

    @classmethod
    def start(
        cls,
        program_id: str,
        clock: CalendarClock | None = None,
        start_date: date | datetime | None = None,
    ) -> "ProgramEnrollment":
        """Begin a new enrollment on day 1, starting today unless told otherwise."""
        clock = clock or CalendarClock()
        if start_date is None:
            start_date = clock.today()
        return cls(
            program_id=program_id,
            start_date=clock.local_date(start_date),
            clock=clock,
        )

    # -- queries ---------------------------------------------------------

    @property
    def is_finalized(self) -> bool:
        """Whether the whole program was completed. Further day completions are no-ops."""
        return self.completed_at is not None

    @property
    def state(self) -> EnrollmentState:
        if self.completed_at is not None:
            return EnrollmentState.COMPLETED
        if not self.is_active:
            return EnrollmentState.ABANDONED
        return EnrollmentState.IN_PROGRESS

    @property
    def completed_days(self) -> list[int]:
        """Day numbers that have a completion record, ascending."""
        return sorted(record.day for record in self.day_completions)

    def computed_current_day(
        self, program_duration_days: int, clock: CalendarClock | None = None
    ) -> int:
        """Day the user should be on now. Does not update ``current_day``."""
        return compute_current_day(
            self.start_date, program_duration_days, clock or self.clock
        )

    def is_day_completed(self, day: int) -> bool:
        """Whether a completion record exists for ``day``, regardless of item count."""
        return self._record_for(day) is not None

    def completed_item_ids(self, day: int) -> set[str]:
        """Item ids completed on ``day``; empty when the day has no record."""
        record = self._record_for(day)
        if record is None:
            return set()
        return set(record.completed_item_ids)

    def progress_fraction(self, program_duration_days: int) -> float:
        """Share of program days completed (0.0 - 1.0)."""
        validate_duration(program_duration_days)
        done = sum(1 for day in self.completed_days if day <= program_duration_days)
        return done / program_duration_days

    # -- mutations -------------------------------------------------------

    def sync_current_day(
        self, program_duration_days: int, clock: CalendarClock | None = None
    ) -> int:
        """Persist the computed day into ``current_day``.

        The cached value never moves backwards.
        """
        computed = self.computed_current_day(program_duration_days, clock)
        new_day = min(max(self.current_day, computed), program_duration_days)
        if new_day != self.current_day:
            logger.debug(
                "Enrollment %s advanced from day %d to day %d",
                self.id,
                self.current_day,
                new_day,
            )
            self.current_day = new_day
            self._touch()
        return self.current_day

    def mark_item_completed(
        self,
        item_id: str,
        day: int,
        program_duration_days: int | None = None,
    ) -> bool:
        """Record that a content item was completed on ``day``.

        Args:
            item_id: Routine, movement or lesson reference (not validated)
            day: Program day number
            program_duration_days: When given, ``day`` is checked against it

        Returns:
            True if the item was newly recorded, False if already present
        """
        if program_duration_days is not None:
            validate_duration(program_duration_days)
        validate_day(day, program_duration_days)

        now = self.clock.now()
        record = self._record_for(day)
        added = False
        if record is None:
            self.day_completions.append(
                DayCompletionRecord(day=day, completed_item_ids=[item_id], completed_at=now)
            )
            added = True
        elif not record.has_item(item_id):
            record.completed_item_ids.append(item_id)
            added = True

        if added:
            logger.debug("Enrollment %s: item %s completed on day %d", self.id, item_id, day)
        self._touch(now)
        return added

    def unmark_item_completed(self, item_id: str, day: int) -> bool:
        """Remove an item from a day's record. The record itself is kept.

        Returns:
            True if the item was removed
        """
        validate_day(day)
        record = self._record_for(day)
        if record is None or not record.has_item(item_id):
            return False

        record.completed_item_ids.remove(item_id)
        self._touch()
        return True

    def mark_day_completed(
        self, day: int, program_duration_days: int
    ) -> CompletionMilestone:
        """Finalize a program day.

        Completing the final day finishes the program: ``completed_at`` is
        set and ``is_active`` turned off. That transition happens once;
        after it every call is accepted as a no-op and returns
        ``CompletionMilestone.NONE``.

        Raises:
            InvalidDurationError: If ``program_duration_days`` is not positive
            OutOfRangeDayError: If ``day`` is outside the program
        """
        validate_duration(program_duration_days)
        validate_day(day, program_duration_days)

        now = self.clock.now()
        if self.is_finalized:
            self._touch(now)
            return CompletionMilestone.NONE

        if self._record_for(day) is None:
            self.day_completions.append(
                DayCompletionRecord(day=day, completed_item_ids=[], completed_at=now)
            )

        milestone = CompletionMilestone.DAY_COMPLETED
        if day >= program_duration_days:
            self.completed_at = now
            self.is_active = False
            milestone = CompletionMilestone.PROGRAM_COMPLETED
            logger.info("Enrollment %s completed program %s", self.id, self.program_id)
        else:
            logger.info("Enrollment %s completed day %d", self.id, day)

        self._touch(now)
        return milestone

    def deactivate(self) -> None:
        """Turn the enrollment off without completing it (host-driven)."""
        if self.is_active:
            self.is_active = False
            self._touch()

    def _record_for(self, day: int) -> DayCompletionRecord | None:
        for record in self.day_completions:
            if record.day == day:
                return record
        return None

    def _touch(self, now: datetime | None = None) -> None:
        self.updated_at = now or self.clock.now()

    # -- storage ---------------------------------------------------------

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "program_id": self.program_id,
            "start_date": self.start_date.isoformat(),
            "current_day": self.current_day,
            "day_completions": [record.to_dict() for record in self.day_completions],
            "is_active": self.is_active,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(
        cls, data: dict, clock: CalendarClock | None = None
    ) -> "ProgramEnrollment":
        """Create from dictionary.

        Records sharing a day number are merged into the first one.
        """
        records: list[DayCompletionRecord] = []
        by_day: dict[int, DayCompletionRecord] = {}
        for raw in data.get("day_completions", []):
            record = DayCompletionRecord.from_dict(raw)
            existing = by_day.get(record.day)
            if existing is None:
                by_day[record.day] = record
                records.append(record)
                continue
            for item_id in record.completed_item_ids:
                if not existing.has_item(item_id):
                    existing.completed_item_ids.append(item_id)

        kwargs = {}
        if data.get("id"):
            kwargs["id"] = data["id"]
        if clock is not None:
            kwargs["clock"] = clock

        return cls(
            program_id=data["program_id"],
            start_date=parse_date(data["start_date"]),
            current_day=data.get("current_day", 1),
            day_completions=records,
            is_active=bool(data.get("is_active", True)),
            completed_at=parse_datetime(data.get("completed_at")),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
            **kwargs,
        )

    def get_status_display(self) -> str:
        """Get a human-readable status string."""
        status_map = {
            EnrollmentState.IN_PROGRESS: "In Progress",
            EnrollmentState.COMPLETED: "Completed",
            EnrollmentState.ABANDONED: "Abandoned",
        }
        return status_map[self.state]
