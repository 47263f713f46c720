"""Daily activity commands: logging, streaks and the calendar."""

from datetime import datetime

import click

from ..models.daily_log import RoutineLevel
from ..models.progress import DayMark
from .base import async_command, echo_error, echo_success, ensure_initialized, get_activity_service

WEEKDAY_LABELS = ["M", "T", "W", "T", "F", "S", "S"]


@click.group()
@click.pass_context
def activity(ctx):
    """Log daily routines and view streaks."""
    ensure_initialized(ctx)


@activity.command("log")
@click.argument("item_id")
@click.option("--movement", "-m", is_flag=True, help="ITEM_ID is a movement, not a routine")
@click.option(
    "--level",
    "-l",
    type=click.Choice([level.value for level in RoutineLevel]),
    default=RoutineLevel.FULL.value,
    help="Routine effort level",
)
@click.option(
    "--date",
    "log_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date to log (YYYY-MM-DD, default: today)",
)
@async_command
async def log(item_id: str, movement: bool, level: str, log_date: datetime | None):
    """Record a completed routine or movement."""
    service = get_activity_service()
    day = log_date.date() if log_date else None

    if movement:
        entry = await service.record_movement(item_id, day)
    else:
        entry = await service.record_routine(item_id, RoutineLevel(level), day)

    echo_success(f"Logged {item_id} on {entry.date.isoformat()}")
    summary = await service.streaks()
    click.echo(f"Current streak: {summary.current_streak} day(s)")


@activity.command("streak")
@async_command
async def streak():
    """Show current and longest streaks."""
    service = get_activity_service()
    summary = await service.streaks()
    monthly = await service.monthly()

    click.echo()
    click.echo(click.style(f"{summary.current_streak} day streak", bold=True))
    click.echo(f"Longest: {summary.longest_streak} days")
    click.echo(f"Total completions: {summary.total_completions}")
    if summary.last_completion_date:
        click.echo(f"Last completion: {summary.last_completion_date.isoformat()}")

    if monthly:
        click.echo()
        click.echo(click.style("By month:", bold=True))
        for key, count in monthly.items():
            click.echo(f"  {key}: {count}")


@activity.command("calendar")
@click.option("--year", "-y", type=int, default=None, help="Year (default: current)")
@click.option("--month", "-m", type=int, default=None, help="Month 1-12 (default: current)")
@click.pass_context
@async_command
async def calendar_view(ctx: click.Context, year: int | None, month: int | None):
    """Show a month grid. Completed days are marked with *, today with []."""
    service = get_activity_service()
    try:
        grid = await service.calendar(year, month)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    labels = WEEKDAY_LABELS[service.first_weekday:] + WEEKDAY_LABELS[:service.first_weekday]

    click.echo()
    click.echo(click.style(datetime(grid.year, grid.month, 1).strftime("%B %Y"), bold=True))
    click.echo(" ".join(f"{label:>4}" for label in labels))
    for week in grid.weeks():
        cells = []
        for cell in week:
            if cell is None:
                cells.append("    ")
            elif cell.mark == DayMark.COMPLETED:
                cells.append(click.style(f"{cell.date.day:>3}*", fg="green"))
            elif cell.mark == DayMark.TODAY:
                cells.append(click.style(f"[{cell.date.day:>2}]", fg="yellow"))
            else:
                cells.append(f"{cell.date.day:>4}")
        click.echo(" ".join(cells))
    click.echo()
    click.echo(f"{grid.completed_count} day(s) completed this month")
