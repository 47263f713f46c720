"""Multi-day program catalog models."""

from dataclasses import dataclass, field

from .localized import LocalizedText


@dataclass
class ProgramDay:
    """Content references for a single program day."""

    day: int
    routine_refs: list[str] = field(default_factory=list)
    movement_refs: list[str] = field(default_factory=list)
    lesson_ref: str | None = None

    @property
    def item_ids(self) -> list[str]:
        """Every content reference for the day, routines first."""
        items = list(self.routine_refs) + list(self.movement_refs)
        if self.lesson_ref:
            items.append(self.lesson_ref)
        return items

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "day": self.day,
            "routine_refs": list(self.routine_refs),
            "movement_refs": list(self.movement_refs),
            "lesson_ref": self.lesson_ref,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProgramDay":
        """Create from dictionary."""
        return cls(
            day=data["day"],
            routine_refs=data.get("routine_refs") or [],
            movement_refs=data.get("movement_refs") or [],
            lesson_ref=data.get("lesson_ref"),
        )


@dataclass
class Program:
    """A guided journey: a daily checklist for several days in a row."""

    id: str
    title: LocalizedText
    duration_days: int
    days: list[ProgramDay] = field(default_factory=list)
    subtitle: LocalizedText | None = None
    tags: list[str] = field(default_factory=list)
    goals: list[str] = field(default_factory=list)
    terrain_fit: list[str] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.title.localized()

    def get_day(self, day: int) -> ProgramDay | None:
        """Get the content for a day number, if the program defines it."""
        for program_day in self.days:
            if program_day.day == day:
                return program_day
        return None

    def fits_terrain(self, terrain_id: str | None) -> bool:
        """Whether the program is recommended for a terrain profile."""
        if terrain_id is None or not self.terrain_fit:
            return True
        return terrain_id in self.terrain_fit

    def get_summary(self) -> str:
        """Get a human-readable program summary."""
        lines = [f"{self.display_name} ({self.duration_days} days)"]
        if self.subtitle and not self.subtitle.is_empty:
            lines.append(self.subtitle.localized())
        for program_day in sorted(self.days, key=lambda d: d.day):
            parts = []
            if program_day.routine_refs:
                parts.append(f"routines: {', '.join(program_day.routine_refs)}")
            if program_day.movement_refs:
                parts.append(f"movements: {', '.join(program_day.movement_refs)}")
            if program_day.lesson_ref:
                parts.append(f"lesson: {program_day.lesson_ref}")
            lines.append(f"  Day {program_day.day}: " + ("; ".join(parts) or "rest"))
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title.to_dict(),
            "subtitle": self.subtitle.to_dict() if self.subtitle else None,
            "duration_days": self.duration_days,
            "tags": list(self.tags),
            "goals": list(self.goals),
            "terrain_fit": list(self.terrain_fit),
            "days": [d.to_dict() for d in self.days],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Program":
        """Create from dictionary (content pack or storage form)."""
        subtitle = data.get("subtitle")
        return cls(
            id=data["id"],
            title=LocalizedText.from_value(data["title"]),
            subtitle=LocalizedText.from_value(subtitle) if subtitle else None,
            duration_days=data["duration_days"],
            tags=data.get("tags") or [],
            goals=data.get("goals") or [],
            terrain_fit=data.get("terrain_fit") or [],
            days=[ProgramDay.from_dict(d) for d in data.get("days", [])],
        )
