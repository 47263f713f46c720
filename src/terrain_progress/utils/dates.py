"""Calendar and clock helpers.

All day arithmetic goes through a ``CalendarClock`` so that the time zone and
the notion of "now" are supplied explicitly instead of read from the process.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CalendarClock:
    """Time zone plus a source of the current instant.

    Args:
        tz: Time zone whose calendar defines day boundaries
        now_fn: Zero-argument callable returning the current instant
    """

    tz: tzinfo = timezone.utc
    now_fn: Callable[[], datetime] = field(default=_utc_now, compare=False)

    @classmethod
    def for_zone(cls, name: str) -> "CalendarClock":
        """Build a clock for an IANA time zone name (e.g. ``Europe/Paris``)."""
        return cls(tz=ZoneInfo(name))

    @classmethod
    def fixed(cls, now: datetime, tz: tzinfo | None = None) -> "CalendarClock":
        """Build a clock frozen at ``now``."""
        if tz is None:
            tz = now.tzinfo or timezone.utc
        return cls(tz=tz, now_fn=lambda: now)

    def now(self) -> datetime:
        """Current instant, expressed in the clock's time zone."""
        current = self.now_fn()
        if current.tzinfo is None:
            return current.replace(tzinfo=self.tz)
        return current.astimezone(self.tz)

    def today(self) -> date:
        """Current local calendar date."""
        return self.now().date()

    def local_date(self, value: date | datetime) -> date:
        """Calendar date of ``value`` in this clock's time zone.

        Naive datetimes are taken as local wall-clock time.
        """
        return to_local_date(value, self.tz)


def to_local_date(value: date | datetime, tz: tzinfo) -> date:
    """Strip time of day from ``value`` in the calendar of ``tz``."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(tz).date()
    return value


def days_between(start: date, end: date) -> int:
    """Whole calendar days from ``start`` to ``end`` (negative if ``end`` is earlier)."""
    return (end - start).days


def previous_day(day: date) -> date:
    return day - timedelta(days=1)


def month_key(day: date) -> str:
    """Month bucket key in ``YYYY-MM`` form."""
    return f"{day.year:04d}-{day.month:02d}"


def parse_date(value: str) -> date:
    """Parse an ISO date or datetime string into a calendar date."""
    if "T" in value or " " in value:
        return datetime.fromisoformat(value).date()
    return date.fromisoformat(value)


def parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)
