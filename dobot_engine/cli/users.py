"""CLI commands for managing assignable users."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from dobot_engine.adapters.task_store import TaskStoreAdapter
from dobot_engine.core.exceptions import TaskValidationError

app = typer.Typer(name="users", help="Manage users tasks can be assigned to")
console = Console()


@app.command("add")
def add_user(
    name: str = typer.Argument(..., help="Display name"),
    email: Optional[str] = typer.Option(None, "--email", "-e", help="Contact email"),
) -> None:
    """Register a new user."""
    try:
        user = asyncio.run(TaskStoreAdapter().add_user(name, email))
    except TaskValidationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    console.print(f"[green]User created:[/green] {user.name} (id {user.id})")


@app.command("list")
def list_users() -> None:
    """List registered users."""
    users = asyncio.run(TaskStoreAdapter().list_users())
    if not users:
        console.print("[dim]No users found.[/dim]")
        return

    table = Table(title="Users")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Email")
    for user in users:
        table.add_row(str(user.id), user.name, user.email or "-")
    console.print(table)


__all__ = ["app"]
