"""CLI commands for inspecting and seeding the task board."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from dobot_engine.adapters.task_store import TaskStoreAdapter
from dobot_engine.core.models import TaskStatus
from dobot_engine.services.response_synthesizer import status_emoji

app = typer.Typer(name="tasks", help="Inspect and seed the task board")
console = Console()

DEMO_USERS: tuple[tuple[str, str], ...] = (
    ("Ana García", "ana@example.com"),
    ("Carlos Mendez", "carlos@example.com"),
    ("David Silva", "david@example.com"),
    ("Roberto Vega", "roberto@example.com"),
)

# (title, description, status, assignee)
DEMO_TASKS: tuple[tuple[str, str, TaskStatus, str], ...] = (
    (
        "Implementar componente de dashboard",
        "Desarrollar el dashboard principal con React",
        TaskStatus.IN_PROGRESS,
        "Ana García",
    ),
    (
        "Configurar API de autenticación",
        "Implementar JWT authentication",
        TaskStatus.COMPLETED,
        "Carlos Mendez",
    ),
    (
        "Integrar notificaciones push",
        "Servicio de notificaciones en tiempo real",
        TaskStatus.BLOCKED,
        "Carlos Mendez",
    ),
    (
        "Setup CI/CD pipeline",
        "Pipeline de integración continua",
        TaskStatus.BLOCKED,
        "David Silva",
    ),
    (
        "Diseñar interfaz móvil",
        "Wireframes responsive para móviles",
        TaskStatus.IN_PROGRESS,
        "Ana García",
    ),
    (
        "Escribir pruebas automatizadas",
        "Suite de pruebas con Jest",
        TaskStatus.CREATED,
        "Roberto Vega",
    ),
)


async def seed_demo_data(store: TaskStoreAdapter) -> int:
    """Insert the demo users and tasks; returns the number of tasks created."""
    user_ids: dict[str, int] = {}
    for name, email in DEMO_USERS:
        user = await store.add_user(name, email)
        user_ids[name] = user.id
    for title, description, status, assignee in DEMO_TASKS:
        task = await store.create(
            title=title,
            description=description,
            status=status,
            user_ids=[user_ids[assignee]],
        )
        console.print(f"✅ {task.title} - {task.status.value}")
    return len(DEMO_TASKS)


@app.command("seed")
def seed() -> None:
    """Load demo users and tasks into the configured store."""
    store = TaskStoreAdapter()
    existing = asyncio.run(store.list_tasks())
    if existing:
        console.print(f"[yellow]Store already holds {len(existing)} tasks; skipping seed.[/yellow]")
        raise typer.Exit(0)
    created = asyncio.run(seed_demo_data(store))
    console.print(f"\n[green]🎉 {created} tareas creadas.[/green]")


@app.command("list")
def list_tasks() -> None:
    """List every task with its status and assignees."""
    tasks = asyncio.run(TaskStoreAdapter().list_tasks())
    if not tasks:
        console.print("[dim]No tasks found.[/dim]")
        return

    table = Table(title="Tasks")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Status")
    table.add_column("Assignees")
    table.add_column("Created")
    for task in tasks:
        table.add_row(
            str(task.id),
            task.title,
            f"{status_emoji(task.status.value)} {task.status.value}",
            ", ".join(task.assignee_names()) or "-",
            task.created_at.strftime("%Y-%m-%d"),
        )
    console.print(table)


__all__ = ["app", "seed_demo_data", "DEMO_USERS", "DEMO_TASKS"]
