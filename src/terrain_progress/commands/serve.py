"""HTTP API server command."""

import click

from ..settings import get_settings
from .base import ensure_initialized


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the HTTP API.

    Serves the program catalog, the active enrollment and daily activity
    as JSON. Interactive docs are available under /docs.

    Examples:

        # Start on default port (8000)
        terrain-progress serve

        # Development mode with auto-reload
        terrain-progress serve --reload
    """
    ensure_initialized(ctx)

    import uvicorn

    from ..web import create_app

    settings = get_settings()

    click.echo()
    click.echo(click.style("Starting terrain-progress API...", fg="green"))
    click.echo()
    click.echo(f"  API:      http://{host}:{port}")
    click.echo(f"  Docs:     http://{host}:{port}/docs")
    click.echo(f"  Timezone: {settings.timezone}")
    click.echo()
    click.echo("Press Ctrl+C to stop the server.")
    click.echo()

    uvicorn.run(
        create_app() if not reload else "terrain_progress.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=reload,
        log_level=settings.log_level.lower(),
    )
