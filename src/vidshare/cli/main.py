"""
Main CLI entry point for vidshare.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from vidshare import __version__
from vidshare.cli.commands.api import api_app
from vidshare.cli.commands.db import db_app
from vidshare.cli.commands.users import users_app

console = Console()

app = typer.Typer(
    name="vidshare",
    help="Video sharing backend",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Add subcommands
app.add_typer(api_app, name="api", help="API server commands")
app.add_typer(db_app, name="db", help="Database schema commands")
app.add_typer(users_app, name="users", help="User management commands")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel(
            f"[bold blue]vidshare[/bold blue] v{__version__}",
            title="Version",
            border_style="blue",
        )
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit"
    ),
) -> None:
    """
    vidshare - video sharing backend.

    Serves the REST API and manages the database that backs it.
    """
    if version:
        console.print(f"vidshare v{__version__}")
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        console.print("[yellow]Use 'vidshare --help' for available commands[/yellow]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
