"""Exceptions raised by terrain-progress."""


class TerrainProgressError(ValueError):
    """Base class for validation errors raised by the progress core."""


class InvalidDurationError(TerrainProgressError):
    """Raised when a program duration is not a positive number of days."""

    def __init__(self, duration_days: int):
        self.duration_days = duration_days
        super().__init__(
            f"Program duration must be a positive number of days, got {duration_days}"
        )


class OutOfRangeDayError(TerrainProgressError):
    """Raised when a caller-supplied day falls outside the program."""

    def __init__(self, day: int, duration_days: int | None = None):
        self.day = day
        self.duration_days = duration_days
        if duration_days is None:
            message = f"Day {day} is invalid, days start at 1"
        else:
            message = f"Day {day} is outside the program range 1-{duration_days}"
        super().__init__(message)


class ProgramNotFoundError(TerrainProgressError):
    """Raised when a program id does not resolve in the catalog."""

    def __init__(self, program_id: str):
        self.program_id = program_id
        super().__init__(f"Program '{program_id}' not found")


class EnrollmentNotFoundError(TerrainProgressError):
    """Raised when an operation needs an enrollment and none exists."""

    def __init__(self, enrollment_id: str | None = None):
        self.enrollment_id = enrollment_id
        if enrollment_id is None:
            message = "No active program enrollment"
        else:
            message = f"Enrollment '{enrollment_id}' not found"
        super().__init__(message)


class ContentPackError(TerrainProgressError):
    """Raised when a content pack cannot be read or fails validation."""

    def __init__(self, message: str, problems: list[str] | None = None):
        self.problems = problems or []
        if self.problems:
            message = message + ":\n  - " + "\n  - ".join(self.problems)
        super().__init__(message)
