"""CLI commands for running the vidshare HTTP API."""

from __future__ import annotations

from typing import Any

import typer

from vidshare.config.settings import settings

APP_PATH = "vidshare.api.main:app"

api_app = typer.Typer(
    name="api",
    help="Run the video sharing API server",
    no_args_is_help=True,
)


@api_app.command()
def start(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on"),
    production: bool = typer.Option(
        False, "--production", help="Run several workers without reload"
    ),
    workers: int = typer.Option(
        2, "--workers", "-w", min=1, help="Worker processes in production mode"
    ),
) -> None:
    """
    Serve the vidshare API under /api/v1.

    Uploaded media is served from the configured media directory at /media.
    Every route except /api/v1/health expects the X-User-Id header set by
    the gateway in front of the server.

    Development mode (default) reloads on code changes and logs at
    VIDSHARE_LOG_LEVEL. Production mode runs --workers processes and only
    logs warnings.

    Examples:
        vidshare api start
        vidshare api start --port 3000
        vidshare api start --host 0.0.0.0 --production -w 4
    """
    import uvicorn

    options: dict[str, Any] = {"host": host, "port": port}
    if production:
        options.update(workers=workers, log_level="warning")
    else:
        options.update(reload=True, log_level=settings.log_level.lower())

    uvicorn.run(APP_PATH, **options)
