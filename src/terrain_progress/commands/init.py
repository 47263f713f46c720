"""Initialize project command."""

from pathlib import Path

import click

from ..data.content_pack import get_content_pack_path, seed_programs_from_pack
from ..db import get_db_path, init_db
from ..errors import ContentPackError
from ..settings import get_settings
from .base import async_command, echo_error, echo_info, echo_success


@click.command()
@click.option(
    "--content-pack",
    "content_pack",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Content pack JSON to import (default: bundled pack)",
)
@click.pass_context
@async_command
async def init(ctx: click.Context, content_pack: Path | None):
    """Initialize the terrain-progress database and program catalog.

    This creates the data directory, initializes the SQLite database and
    imports the programs from the content pack.
    """
    data_dir = get_settings().data_dir
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing terrain-progress in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    pack_path = content_pack or get_content_pack_path()
    try:
        count = await seed_programs_from_pack(db_path, pack_path)
    except ContentPackError as e:
        echo_error(str(e))
        ctx.exit(1)

    echo_success(f"Program catalog populated ({count} programs from {pack_path.name})")

    click.echo()
    click.echo("terrain-progress is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Browse programs:      terrain-progress programs list")
    click.echo("  2. Start one:            terrain-progress progress enroll")
    click.echo("  3. Check today's plan:   terrain-progress progress status")
