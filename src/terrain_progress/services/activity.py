"""Daily activity logging and progress aggregation."""

import calendar
import logging
from datetime import date

from ..db.repositories import DailyLogRepository
from ..models.daily_log import DailyActivity, DailyLog, RoutineLevel
from ..models.progress import CalendarMonth, StreakSummary
from ..utils.dates import CalendarClock
from .streaks import build_calendar_month, compute_streaks, monthly_completions

logger = logging.getLogger(__name__)


class ActivityService:
    """Record daily routine/movement completions and summarize them."""

    def __init__(
        self,
        daily_log_repo: DailyLogRepository,
        clock: CalendarClock | None = None,
        first_weekday: int = calendar.SUNDAY,
    ):
        self.daily_log_repo = daily_log_repo
        self.clock = clock or CalendarClock()
        self.first_weekday = first_weekday

    async def _load_or_create(self, day: date) -> DailyLog:
        log = await self.daily_log_repo.get_by_date(day)
        if log is None:
            now = self.clock.now()
            log = DailyLog(date=day, created_at=now, updated_at=now)
        return log

    async def record_routine(
        self,
        routine_id: str,
        level: RoutineLevel = RoutineLevel.FULL,
        day: date | None = None,
    ) -> DailyLog:
        """Mark a routine done for ``day`` (today by default)."""
        day = day or self.clock.today()
        log = await self._load_or_create(day)
        log.mark_routine_complete(routine_id, level, now=self.clock.now())
        await self.daily_log_repo.upsert(log)
        logger.info("Logged routine %s (%s) on %s", routine_id, level.value, day)
        return log

    async def record_movement(self, movement_id: str, day: date | None = None) -> DailyLog:
        """Mark a movement done for ``day`` (today by default)."""
        day = day or self.clock.today()
        log = await self._load_or_create(day)
        log.mark_movement_complete(movement_id, now=self.clock.now())
        await self.daily_log_repo.upsert(log)
        logger.info("Logged movement %s on %s", movement_id, day)
        return log

    async def activities(self) -> list[DailyActivity]:
        """Activity history, most-recent-first."""
        logs = await self.daily_log_repo.list_recent()
        return [log.to_activity() for log in logs]

    async def streaks(self) -> StreakSummary:
        return compute_streaks(await self.activities(), today=self.clock.today())

    async def monthly(self) -> dict[str, int]:
        return monthly_completions(await self.activities())

    async def calendar(self, year: int | None = None, month: int | None = None) -> CalendarMonth:
        """Calendar grid for a month, the current month by default."""
        today = self.clock.today()
        year = year or today.year
        month = month or today.month
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month {month}")

        _, last = calendar.monthrange(year, month)
        logs = await self.daily_log_repo.list_between(
            date(year, month, 1), date(year, month, last)
        )
        return build_calendar_month(
            year,
            month,
            [log.to_activity() for log in logs],
            today=today,
            first_weekday=self.first_weekday,
        )
