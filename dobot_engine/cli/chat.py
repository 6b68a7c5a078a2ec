"""CLI command sending a single message to the chat assistant."""

from __future__ import annotations

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from dobot_engine.bootstrap import build_default_service_container
from dobot_engine.core.api_models import ChatMessageInput
from dobot_engine.services.command_processor import process_message

console = Console()


def chat_command(
    message: str = typer.Argument(..., help="Message for the assistant"),
    user_id: Optional[int] = typer.Option(None, "--user-id", "-u", help="Sending user id"),
    show_action: bool = typer.Option(False, "--action", "-a", help="Print action metadata"),
) -> None:
    """Ask the assistant something, e.g. 'Crear tarea "Revisar código"'."""
    if not message.strip():
        console.print("[red]Error:[/red] message must not be empty")
        raise typer.Exit(1)

    services = build_default_service_container()
    result = asyncio.run(
        process_message(ChatMessageInput(message=message, user_id=user_id), services)
    )

    console.print(Panel(result.response, title="DoBot", expand=False))
    if result.suggestions:
        console.print("[bold]Sugerencias:[/bold]")
        for suggestion in result.suggestions:
            console.print(f"  • {suggestion}")
    if show_action and result.action_taken is not None:
        payload = result.action_taken.model_dump(mode="json", by_alias=True)
        console.print_json(json.dumps(payload, ensure_ascii=False))


__all__ = ["chat_command"]
