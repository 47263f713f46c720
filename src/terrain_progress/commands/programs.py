"""Program catalog commands."""

import click

from ..db import ProgramRepository, get_db_path
from .base import async_command, echo_error, echo_info, ensure_initialized, format_table


@click.group()
@click.pass_context
def programs(ctx):
    """Browse the program catalog."""
    ensure_initialized(ctx)


@programs.command(name="list")
@click.option("--terrain", default=None, help="Only programs that fit this terrain profile id")
@click.pass_context
@async_command
async def list_programs(ctx, terrain: str | None):
    """List all catalog programs."""
    repo = ProgramRepository(get_db_path())

    all_programs = [p for p in await repo.list_all() if p.fits_terrain(terrain)]

    if not all_programs:
        echo_info("No programs found. Import a content pack with 'terrain-progress init'")
        return

    headers = ["ID", "Title", "Days", "Tags"]
    rows = []
    for program in all_programs:
        title = program.display_name
        rows.append([
            program.id,
            title[:30] + "..." if len(title) > 30 else title,
            str(program.duration_days),
            ", ".join(program.tags) or "-",
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(all_programs)} program(s)")


@programs.command()
@click.argument("program_id")
@click.pass_context
@async_command
async def show(ctx, program_id: str):
    """Show the day-by-day content of a program."""
    repo = ProgramRepository(get_db_path())

    program = await repo.get(program_id)
    if not program:
        echo_error(f"Program '{program_id}' not found")
        ctx.exit(1)

    click.echo()
    click.echo("=" * 60)
    click.echo(f"Program: {program.display_name} (ID: {program.id})")
    click.echo("=" * 60)
    if program.goals:
        click.echo(f"Goals: {', '.join(program.goals)}")
    click.echo()
    click.echo(program.get_summary())
