"""Program progress commands."""

from datetime import datetime

import click
import questionary

from ..errors import TerrainProgressError
from ..models.enrollment import CompletionMilestone
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    get_enrollment_service,
)


@click.group()
@click.pass_context
def progress(ctx):
    """Track progress through a multi-day program.

    Enroll in a program, check off each day's items and finish days.
    The current day advances by itself with the calendar.
    """
    ensure_initialized(ctx)


@progress.command("enroll")
@click.argument("program_id", required=False)
@click.option(
    "--start",
    "start_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Start date (YYYY-MM-DD, default: today)",
)
@click.option("--yes", "-y", is_flag=True, help="Replace the active program without asking")
@click.pass_context
@async_command
async def enroll(ctx: click.Context, program_id: str | None, start_date: datetime | None, yes: bool):
    """Start a program. Prompts for one when PROGRAM_ID is omitted."""
    service = get_enrollment_service()

    if program_id is None:
        catalog = await service.program_repo.list_all()
        if not catalog:
            echo_error("No programs in the catalog.")
            ctx.exit(1)
        program_id = await questionary.select(
            "Which program would you like to start?",
            choices=[
                questionary.Choice(f"{p.display_name} ({p.duration_days} days)", p.id)
                for p in catalog
            ],
        ).ask_async()
        if program_id is None:
            echo_info("Cancelled")
            return

    active = await service.get_active()
    if active and not yes:
        echo_warning(
            f"You are on day {active.enrollment.current_day} of {active.program.display_name}."
        )
        if not click.confirm("Leave it and start the new program?"):
            echo_info("Cancelled")
            return

    try:
        enrolled = await service.enroll(
            program_id, start_date=start_date.date() if start_date else None
        )
    except TerrainProgressError as e:
        echo_error(str(e))
        ctx.exit(1)

    echo_success(f"Started program: {enrolled.program.display_name}")
    click.echo(f"Position: Day {enrolled.current_day} of {enrolled.program.duration_days}")


@progress.command("status")
@click.option("--day", "-d", type=int, default=None, help="Show a specific day")
@click.pass_context
@async_command
async def status(ctx: click.Context, day: int | None):
    """Show the active program and a day's checklist."""
    service = get_enrollment_service()

    try:
        active = await service.get_active()
        if active is None:
            echo_info("No active program. Run 'terrain-progress progress enroll' to begin.")
            return
        plan = await service.day_plan(day)
    except TerrainProgressError as e:
        echo_error(str(e))
        ctx.exit(1)

    enrollment = active.enrollment
    program = active.program
    duration = program.duration_days

    click.echo()
    click.echo(click.style(f"Program: {program.display_name}", bold=True))
    click.echo("=" * 50)
    click.echo(f"Status: {enrollment.get_status_display()}")
    click.echo(f"Started: {enrollment.start_date.isoformat()}")
    click.echo(f"Position: Day {enrollment.current_day} of {duration}")
    click.echo(
        f"Progress: {enrollment.progress_fraction(duration) * 100:.0f}% "
        f"({len(enrollment.completed_days)}/{duration} days)"
    )

    click.echo()
    done = click.style(" [done]", fg="green") if plan.is_completed else ""
    click.echo(click.style(f"Day {plan.day}:", bold=True) + done)
    if not plan.item_ids:
        click.echo("  Rest day")
    for item_id in plan.item_ids:
        mark = "x" if item_id in plan.completed_item_ids else " "
        click.echo(f"  [{mark}] {item_id}")

    click.echo()
    click.echo(click.style("Days:", bold=True))
    for number in range(1, duration + 1):
        prefix = ">" if number == enrollment.current_day else " "
        state = ""
        if enrollment.is_day_completed(number):
            state = click.style(" [done]", fg="green")
        elif number < enrollment.current_day:
            state = click.style(" [missed]", fg="yellow")
        click.echo(f"  {prefix} Day {number}{state}")


@progress.command("complete-item")
@click.argument("item_id")
@click.option("--day", "-d", type=int, default=None, help="Program day (default: current day)")
@click.pass_context
@async_command
async def complete_item(ctx: click.Context, item_id: str, day: int | None):
    """Check off a routine, movement or lesson."""
    service = get_enrollment_service()

    try:
        added = await service.complete_item(item_id, day)
    except TerrainProgressError as e:
        echo_error(str(e))
        ctx.exit(1)

    if added:
        echo_success(f"Completed {item_id}")
    else:
        echo_info(f"{item_id} was already completed")


@progress.command("uncomplete-item")
@click.argument("item_id")
@click.option("--day", "-d", type=int, default=None, help="Program day (default: current day)")
@click.pass_context
@async_command
async def uncomplete_item(ctx: click.Context, item_id: str, day: int | None):
    """Uncheck a previously completed item."""
    service = get_enrollment_service()

    try:
        removed = await service.uncomplete_item(item_id, day)
    except TerrainProgressError as e:
        echo_error(str(e))
        ctx.exit(1)

    if removed:
        echo_success(f"Unchecked {item_id}")
    else:
        echo_info(f"{item_id} was not completed")


@progress.command("complete-day")
@click.option("--day", "-d", type=int, default=None, help="Program day (default: current day)")
@click.pass_context
@async_command
async def complete_day(ctx: click.Context, day: int | None):
    """Mark a program day as complete."""
    service = get_enrollment_service()

    try:
        active, milestone = await service.complete_day(day)
    except TerrainProgressError as e:
        echo_error(str(e))
        ctx.exit(1)

    if milestone == CompletionMilestone.PROGRAM_COMPLETED:
        echo_success(f"Congratulations! {active.program.display_name} complete!")
        click.echo("Consider starting a new program with 'terrain-progress progress enroll'.")
    elif milestone == CompletionMilestone.DAY_COMPLETED:
        completed = day or active.enrollment.current_day
        echo_success(f"Day {completed} complete")
    else:
        echo_info("Program already completed.")


@progress.command("unenroll")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def unenroll(ctx: click.Context, yes: bool):
    """Leave the active program without completing it."""
    service = get_enrollment_service()

    active = await service.get_active()
    if active is None:
        echo_info("No active program.")
        return

    if not yes and not click.confirm(f"Leave {active.program.display_name}?"):
        echo_info("Cancelled")
        return

    await service.unenroll()
    echo_success(f"Left {active.program.display_name} on day {active.enrollment.current_day}")


@progress.command("history")
@click.pass_context
@async_command
async def history(ctx: click.Context):
    """List all enrollments."""
    service = get_enrollment_service()

    entries = await service.history()
    if not entries:
        echo_info("No enrollments yet.")
        return

    rows = []
    for enrollment, program in entries:
        rows.append([
            program.display_name[:30] if program else enrollment.program_id,
            enrollment.start_date.isoformat(),
            str(enrollment.current_day),
            str(len(enrollment.completed_days)),
            enrollment.get_status_display(),
        ])

    click.echo()
    click.echo(format_table(["Program", "Started", "Day", "Done", "Status"], rows))
