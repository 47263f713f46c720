"""CLI entry point for terrain-progress."""

import click
from pydantic import ValidationError

from . import __version__
from .commands import activity, init, programs, progress, serve
from .commands.base import echo_error
from .logging_config import setup_logging
from .settings import get_settings


@click.group()
@click.version_option(version=__version__, prog_name="terrain-progress")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """terrain-progress: guided wellness program tracker.

    Follow multi-day programs one calendar day at a time, check off each
    day's routines, movements and lessons, and keep your daily streak.

    Example usage:

        # Initialize the database and program catalog
        terrain-progress init

        # Start a program and see today's checklist
        terrain-progress progress enroll three-day-reset
        terrain-progress progress status

        # Check off items and finish the day
        terrain-progress progress complete-item warm-start-morning
        terrain-progress progress complete-day

        # Daily streak
        terrain-progress activity log warm-start-morning --level lite
        terrain-progress activity calendar
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        echo_error(f"Invalid configuration: {e}")
        ctx.exit(1)
    setup_logging("DEBUG" if verbose else settings.log_level)


# Register commands
main.add_command(init)
main.add_command(programs)
main.add_command(progress)
main.add_command(activity)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
