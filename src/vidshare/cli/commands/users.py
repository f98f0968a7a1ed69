"""
User CLI commands.

Identity is verified upstream of the API, so accounts are provisioned
here rather than through an HTTP endpoint.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from vidshare.api.schemas.common import OwnerSummary
from vidshare.config.database import db_manager
from vidshare.container import container
from vidshare.exceptions import ConflictError
from vidshare.models.user import UserCreate

console = Console()

users_app = typer.Typer(
    name="users",
    help="User management commands",
    no_args_is_help=True,
)


@users_app.command()
def add(
    username: str = typer.Argument(..., help="Unique username (lowercased)"),
    full_name: str = typer.Option(..., "--full-name", "-n", help="Display name"),
    avatar_url: Optional[str] = typer.Option(None, "--avatar-url", help="Avatar URL"),
) -> None:
    """
    Create a user and print its id.

    The id is what clients send in the X-User-Id header.

    Examples:
        vidshare users add alice --full-name "Alice Doe"
    """
    try:
        data = UserCreate(username=username, full_name=full_name, avatar_url=avatar_url)
    except ValidationError as e:
        console.print(Panel(str(e), title="Validation Error", border_style="red"))
        raise typer.Exit(code=1) from e

    async def create() -> OwnerSummary | None:
        created: OwnerSummary | None = None
        try:
            # Run the loop to completion so the session commits
            async for session in db_manager.get_session():
                created = await container.user_service.create_user(session, data)
            return created
        finally:
            await db_manager.close()

    try:
        user = asyncio.run(create())
    except ConflictError as e:
        console.print(Panel(e.message, title="Conflict", border_style="red"))
        raise typer.Exit(code=1) from e
    if user is None:
        raise typer.Exit(code=1)

    console.print(
        Panel(
            f"[green]✓[/green] Created [bold]{user.username}[/bold]\n"
            f"id: [cyan]{user.id}[/cyan]",
            title="User",
            border_style="green",
        )
    )


@users_app.command("list")
def list_users(
    limit: int = typer.Option(50, "--limit", "-l", min=1, help="Maximum rows"),
) -> None:
    """List users with their ids."""

    async def fetch() -> list[OwnerSummary]:
        users: list[OwnerSummary] = []
        try:
            async for session in db_manager.get_session():
                rows = await container.create_user_repository().get_multi(
                    session, limit=limit
                )
                users = [OwnerSummary.model_validate(row) for row in rows]
            return users
        finally:
            await db_manager.close()

    users = asyncio.run(fetch())
    if not users:
        console.print("[yellow]No users yet[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("ID", style="cyan")
    table.add_column("Username", style="bold")
    table.add_column("Full name")
    for user in users:
        table.add_row(user.id, user.username, user.full_name)
    console.print(table)
