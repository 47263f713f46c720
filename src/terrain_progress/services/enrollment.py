"""Enrollment service: the host side of program tracking.

Loads the active enrollment and its catalog program, calls into the
enrollment model and saves the result. Every public coroutine is one
load -> mutate -> save cycle.
"""

import logging
from dataclasses import dataclass, field
from datetime import date

from ..db.repositories import EnrollmentRepository, ProgramRepository
from ..errors import EnrollmentNotFoundError, ProgramNotFoundError
from ..models.enrollment import CompletionMilestone, ProgramEnrollment, validate_day
from ..models.program import Program, ProgramDay
from ..utils.dates import CalendarClock

logger = logging.getLogger(__name__)


@dataclass
class ActiveProgram:
    """An enrollment together with the program it tracks."""

    enrollment: ProgramEnrollment
    program: Program

    @property
    def current_day(self) -> int:
        return self.enrollment.current_day


@dataclass
class DayPlan:
    """Content for one program day with completion state."""

    day: int
    program_day: ProgramDay | None
    completed_item_ids: set[str] = field(default_factory=set)
    is_completed: bool = False
    is_current: bool = False

    @property
    def item_ids(self) -> list[str]:
        return self.program_day.item_ids if self.program_day else []

    @property
    def remaining_item_ids(self) -> list[str]:
        return [i for i in self.item_ids if i not in self.completed_item_ids]

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "items": [
                {"id": item_id, "completed": item_id in self.completed_item_ids}
                for item_id in self.item_ids
            ],
            "extra_completed": sorted(self.completed_item_ids - set(self.item_ids)),
            "is_completed": self.is_completed,
            "is_current": self.is_current,
        }


def build_day_plan(program: Program, enrollment: ProgramEnrollment, day: int) -> DayPlan:
    """Resolve a program day against the enrollment's completion records."""
    validate_day(day, program.duration_days)
    return DayPlan(
        day=day,
        program_day=program.get_day(day),
        completed_item_ids=enrollment.completed_item_ids(day),
        is_completed=enrollment.is_day_completed(day),
        is_current=day == enrollment.current_day,
    )


class EnrollmentService:
    """Enroll in programs and record progress against the active enrollment."""

    def __init__(
        self,
        program_repo: ProgramRepository,
        enrollment_repo: EnrollmentRepository,
        clock: CalendarClock | None = None,
    ):
        self.program_repo = program_repo
        self.enrollment_repo = enrollment_repo
        self.clock = clock or enrollment_repo.clock

    async def enroll(
        self, program_id: str, start_date: date | None = None
    ) -> ActiveProgram:
        """Start a program and make it the only active enrollment.

        Raises:
            ProgramNotFoundError: If the program is not in the catalog
        """
        program = await self.program_repo.get(program_id)
        if program is None:
            raise ProgramNotFoundError(program_id)

        enrollment = ProgramEnrollment.start(program_id, self.clock, start_date)
        enrollment.sync_current_day(program.duration_days)
        await self.enrollment_repo.create(enrollment)
        await self.enrollment_repo.activate(enrollment.id)

        logger.info("Enrolled in %s starting %s", program_id, enrollment.start_date)
        return ActiveProgram(enrollment=enrollment, program=program)

    async def get_active(self) -> ActiveProgram | None:
        """Load the active enrollment and its program, if any."""
        enrollment = await self.enrollment_repo.get_active()
        if enrollment is None:
            return None

        program = await self.program_repo.get(enrollment.program_id)
        if program is None:
            raise ProgramNotFoundError(enrollment.program_id)
        return ActiveProgram(enrollment=enrollment, program=program)

    async def require_active(self) -> ActiveProgram:
        active = await self.get_active()
        if active is None:
            raise EnrollmentNotFoundError()
        return active

    async def refresh_current_day(self) -> ActiveProgram:
        """Advance the cached current day to today's computed day and save."""
        active = await self.require_active()
        before = active.enrollment.current_day
        active.enrollment.sync_current_day(active.program.duration_days)
        if active.enrollment.current_day != before:
            await self.enrollment_repo.update(active.enrollment)
        return active

    async def unenroll(self) -> ProgramEnrollment | None:
        """Deactivate the active enrollment without completing it."""
        enrollment = await self.enrollment_repo.get_active()
        if enrollment is None:
            return None

        enrollment.deactivate()
        await self.enrollment_repo.update(enrollment)
        logger.info("Left program %s on day %d", enrollment.program_id, enrollment.current_day)
        return enrollment

    async def complete_item(self, item_id: str, day: int | None = None) -> bool:
        """Mark an item completed, on the current day unless ``day`` is given."""
        active = await self.refresh_current_day()
        if day is None:
            day = active.enrollment.current_day

        added = active.enrollment.mark_item_completed(
            item_id, day, active.program.duration_days
        )
        await self.enrollment_repo.update(active.enrollment)
        return added

    async def uncomplete_item(self, item_id: str, day: int | None = None) -> bool:
        """Remove a completed item from a day."""
        active = await self.require_active()
        if day is None:
            day = active.enrollment.current_day

        validate_day(day, active.program.duration_days)
        removed = active.enrollment.unmark_item_completed(item_id, day)
        if removed:
            await self.enrollment_repo.update(active.enrollment)
        return removed

    async def complete_day(self, day: int | None = None) -> tuple[ActiveProgram, CompletionMilestone]:
        """Finalize a day, on the current day unless ``day`` is given.

        With no active enrollment, a finished program is still accepted: the
        latest enrollment is used when it is finalized, and the call returns
        ``CompletionMilestone.NONE``.

        Returns:
            The enrollment and program after saving, and the milestone reached

        Raises:
            EnrollmentNotFoundError: If nothing is active and the latest
                enrollment did not finish its program
        """
        if await self.enrollment_repo.get_active() is None:
            active = await self._latest_finished()
        else:
            active = await self.refresh_current_day()
        if day is None:
            day = active.enrollment.current_day

        milestone = active.enrollment.mark_day_completed(day, active.program.duration_days)
        await self.enrollment_repo.update(active.enrollment)
        return active, milestone

    async def _latest_finished(self) -> ActiveProgram:
        enrollment = await self.enrollment_repo.get_latest()
        if enrollment is None or not enrollment.is_finalized:
            raise EnrollmentNotFoundError()

        program = await self.program_repo.get(enrollment.program_id)
        if program is None:
            raise ProgramNotFoundError(enrollment.program_id)
        return ActiveProgram(enrollment=enrollment, program=program)

    async def day_plan(self, day: int | None = None) -> DayPlan:
        """Content and completion state for a day of the active program."""
        active = await self.refresh_current_day()
        if day is None:
            day = active.enrollment.current_day
        return build_day_plan(active.program, active.enrollment, day)

    async def history(self) -> list[tuple[ProgramEnrollment, Program | None]]:
        """All enrollments, newest first, with their programs where still in the catalog."""
        result = []
        for enrollment in await self.enrollment_repo.list_all():
            program = await self.program_repo.get(enrollment.program_id)
            result.append((enrollment, program))
        return result
