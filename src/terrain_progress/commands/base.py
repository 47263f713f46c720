"""Shared CLI utilities."""

import asyncio
from functools import wraps

import click

from ..db import DailyLogRepository, EnrollmentRepository, ProgramRepository, get_db_path
from ..services import ActivityService, EnrollmentService
from ..settings import get_settings


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'terrain-progress init' first."
        )
        ctx.exit(1)


def get_enrollment_service() -> EnrollmentService:
    """Build the enrollment service from settings."""
    db_path = get_db_path()
    clock = get_settings().clock()
    return EnrollmentService(
        ProgramRepository(db_path),
        EnrollmentRepository(db_path, clock=clock),
        clock=clock,
    )


def get_activity_service() -> ActivityService:
    """Build the activity service from settings."""
    settings = get_settings()
    return ActivityService(
        DailyLogRepository(get_db_path()),
        clock=settings.clock(),
        first_weekday=settings.first_weekday_index,
    )


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row))
        )

    return "\n".join(line.rstrip() for line in lines)
