"""CLI commands for dobot-engine."""

import typer

from dobot_engine.cli.chat import chat_command
from dobot_engine.cli.tasks import app as tasks_app
from dobot_engine.cli.users import app as users_app

main_app = typer.Typer(
    name="dobot",
    help="DoBot task assistant CLI",
    no_args_is_help=True,
)
main_app.command("chat")(chat_command)
main_app.add_typer(tasks_app, name="tasks")
main_app.add_typer(users_app, name="users")


def main() -> None:
    """Entry point for the CLI."""
    main_app()


__all__ = ["main", "main_app"]
