"""
Database CLI commands.

``init`` and ``drop`` work directly from the ORM metadata, which is handy
for local SQLite setups; deployed databases go through Alembic
(``alembic upgrade head``).
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable

import typer
from rich.console import Console
from rich.panel import Panel
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from vidshare.config.database import db_manager
from vidshare.config.settings import settings

console = Console()

db_app = typer.Typer(
    name="db",
    help="Database schema commands",
    no_args_is_help=True,
)


def _display_url() -> str:
    return make_url(settings.database_url).render_as_string(hide_password=True)


def _run(action: str, operation: Awaitable[object]) -> None:
    async def runner() -> None:
        try:
            await operation
        finally:
            await db_manager.close()

    try:
        asyncio.run(runner())
    except SQLAlchemyError as e:
        console.print(
            Panel(
                f"[red]{action} failed:[/red] {e}",
                title="Database Error",
                border_style="red",
            )
        )
        raise typer.Exit(code=1) from e


@db_app.command()
def init() -> None:
    """Create every table that does not exist yet."""
    _run("Schema creation", db_manager.create_tables())
    console.print(
        Panel(
            f"[green]✓[/green] Tables created in {_display_url()}",
            title="Database",
            border_style="green",
        )
    )


@db_app.command()
def drop(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Drop every vidshare table."""
    if not yes:
        typer.confirm("This deletes all data. Continue?", abort=True)
    _run("Schema drop", db_manager.drop_tables())
    console.print(
        Panel("[yellow]![/yellow] All tables dropped", title="Database", border_style="yellow")
    )


@db_app.command()
def check() -> None:
    """Verify the database is reachable."""
    _run("Connection check", db_manager.ping())
    console.print("[green]✓[/green] Database connection OK")
