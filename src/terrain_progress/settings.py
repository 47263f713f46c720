"""Application settings, read from ``TERRAIN_*`` environment variables or ``.env``."""

import calendar
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.dates import CalendarClock

# Default data directory (repository root / data)
DATA_DIR = Path(__file__).parent.parent.parent / "data"
BUNDLED_CONTENT_PACK = Path(__file__).parent / "data" / "base-content-pack.json"

WEEKDAYS = {
    "monday": calendar.MONDAY,
    "sunday": calendar.SUNDAY,
}


class Settings(BaseSettings):
    # === Storage ===
    data_dir: Path = DATA_DIR
    content_pack_path: Path = BUNDLED_CONTENT_PACK

    # === Calendar ===
    timezone: str = "UTC"
    first_weekday: str = "sunday"

    # === Logging ===
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="TERRAIN_", env_file=".env", extra="ignore"
    )

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        value = value.strip()
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone '{value}'") from e
        return value

    @field_validator("first_weekday")
    @classmethod
    def _check_first_weekday(cls, value: str) -> str:
        value = value.lower()
        if value not in WEEKDAYS:
            raise ValueError(f"first_weekday must be one of {sorted(WEEKDAYS)}")
        return value

    @property
    def first_weekday_index(self) -> int:
        """First grid column as a ``calendar`` module constant."""
        return WEEKDAYS[self.first_weekday]

    def clock(self) -> CalendarClock:
        """Calendar clock for the configured time zone."""
        return CalendarClock.for_zone(self.timezone)


@lru_cache
def get_settings() -> Settings:
    return Settings()
