"""Utility helpers for terrain-progress."""

from .dates import CalendarClock, days_between, month_key, to_local_date

__all__ = ["CalendarClock", "days_between", "month_key", "to_local_date"]
