"""Templated Spanish replies, follow-up suggestions, and action envelopes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

from dobot_engine.core.api_models import ActionTaken, ActionType
from dobot_engine.core.models import Task, TaskStatus, TaskSummary, UserStats

from .analytics import rank_users_by_workload

UNKNOWN_ERROR_TEXT = "Error desconocido"

STATUS_EMOJIS: dict[str, str] = {
    TaskStatus.CREATED.value: "📝",
    TaskStatus.IN_PROGRESS.value: "⚡",
    TaskStatus.BLOCKED.value: "🚫",
    TaskStatus.COMPLETED.value: "✅",
    TaskStatus.CANCELLED.value: "❌",
}
DEFAULT_STATUS_EMOJI = "📋"

TASK_CREATED_SUGGESTIONS = (
    "Asignar usuarios a esta tarea",
    'Cambiar el estado a "In Progress"',
    "Agregar más detalles a la descripción",
)
TITLE_MISSING_TEXT = (
    "🤔 Entiendo que quieres crear una tarea, pero no pude identificar el título. "
    "Puedes decir algo como: \"Crear tarea 'Revisar código'\" o "
    '"Nueva tarea: Actualizar documentación"'
)
TITLE_MISSING_SUGGESTIONS = (
    'Crear tarea "Ejemplo de tarea"',
    "Nueva tarea: Revisar documentación",
    'Agregar tarea "Testing de la aplicación"',
)
STATUS_SUGGESTIONS = (
    "¿Qué tareas están bloqueadas?",
    "¿Quién tiene más tareas pendientes?",
    "Crear una nueva tarea",
)
NO_BLOCKED_TEXT = (
    "🎉 ¡Excelente! No hay tareas bloqueadas en este momento. "
    "Todas las tareas están fluyendo correctamente."
)
NO_BLOCKED_SUGGESTIONS = (
    "Ver resumen general de tareas",
    "Crear una nueva tarea",
    "¿Quién tiene más tareas pendientes?",
)
BLOCKED_SUGGESTIONS = (
    "Cambiar estado de tarea bloqueada",
    "Ver resumen general",
    "Crear nueva tarea",
)
NO_BUSY_USERS_TEXT = "📋 No hay usuarios con tareas asignadas en este momento."
NO_BUSY_USERS_SUGGESTIONS = (
    "Ver resumen de tareas",
    "Crear nueva tarea",
    "Ver tareas bloqueadas",
)
BUSY_USER_SUGGESTIONS = (
    "Ver tareas bloqueadas",
    "Crear nueva tarea",
    "Ver resumen general",
)
GREETINGS = (
    "🤖 Soy tu asistente para gestión de tareas. "
    "Puedo ayudarte a crear tareas, consultar estados y más.",
    "💡 Pregúntame sobre tareas bloqueadas, usuarios ocupados o crea nuevas tareas.",
    "🎯 Estoy aquí para hacer tu gestión de proyectos más eficiente.",
)
GENERAL_SUGGESTIONS = (
    'Crear tarea "Mi nueva tarea"',
    "¿Qué tareas están bloqueadas?",
    "¿Quién tiene más tareas pendientes?",
    "Ver resumen de tareas",
)


@dataclass(slots=True)
class Reply:
    """Handler output before the processor stamps it with a timestamp."""

    text: str
    action: ActionTaken | None = None
    suggestions: list[str] | None = None


def _reply(
    text: str,
    suggestions: Sequence[str] | None = None,
    action_type: ActionType | None = None,
    data: Any = None,
) -> Reply:
    action = ActionTaken(type=action_type, data=data) if action_type is not None else None
    return Reply(
        text=text,
        action=action,
        suggestions=list(suggestions) if suggestions is not None else None,
    )


def error_detail(exc: BaseException) -> str:
    """Return the human-readable part of ``exc`` for embedding in a reply."""
    return str(exc) or UNKNOWN_ERROR_TEXT


def status_emoji(status: str) -> str:
    """Emoji shown next to a status line; unknown statuses get a neutral clipboard."""
    return STATUS_EMOJIS.get(status, DEFAULT_STATUS_EMOJI)


def workload_emoji(count: int) -> str:
    """Emoji tier for a user's active task count."""
    if count > 3:
        return "🔥"
    if count > 1:
        return "📋"
    return "✅"


def completion_rate(summary: TaskSummary) -> int:
    """Percentage of completed tasks, rounded half up; 0 for an empty board."""
    if summary.total == 0:
        return 0
    ratio = summary.count_for(TaskStatus.COMPLETED) / summary.total * 100
    return int(math.floor(ratio + 0.5))


def format_created_date(task: Task) -> str:
    """Render a task's creation date the way the Spanish UI shows dates."""
    return task.created_at.strftime("%d/%m/%Y")


def task_created_reply(task: Task) -> Reply:
    """Confirmation for a task the assistant just created."""
    text = (
        f'✅ He creado la tarea "{task.title}" exitosamente. '
        f'La tarea tiene el ID {task.id} y está en estado "{task.status.value}".'
    )
    return _reply(text, TASK_CREATED_SUGGESTIONS, "task_created", task)


def task_creation_failed_reply(title: str, exc: BaseException) -> Reply:
    return _reply(f'❌ No pude crear la tarea "{title}". Error: {error_detail(exc)}')


def title_missing_reply() -> Reply:
    """Clarification sent when a creation request carries no usable title."""
    return _reply(TITLE_MISSING_TEXT, TITLE_MISSING_SUGGESTIONS)


def status_report_reply(summary: TaskSummary) -> Reply:
    """Multi-line task summary, one line per status in the aggregator's order."""
    lines = ["📊 **Resumen de Tareas:**", "", f"• Total: {summary.total} tareas"]
    for status, count in summary.by_status.items():
        lines.append(f"• {status_emoji(status)} {status}: {count} tareas")
    lines.append("")
    lines.append(f"🎯 Tasa de completación: {completion_rate(summary)}%")
    return _reply("\n".join(lines), STATUS_SUGGESTIONS, "query_executed", summary)


def status_failed_reply(exc: BaseException) -> Reply:
    return _reply(f"❌ Error al obtener el resumen de tareas: {error_detail(exc)}")


def no_blocked_tasks_reply() -> Reply:
    return _reply(NO_BLOCKED_TEXT, NO_BLOCKED_SUGGESTIONS)


def blocked_tasks_reply(blocked: Sequence[Task]) -> Reply:
    """Enumerate every blocked task with its details.

    The listing is unbounded; a board with hundreds of blocked tasks produces
    one very long message.
    """
    lines = [f"🚫 **Tareas Bloqueadas ({len(blocked)}):**", ""]
    for index, task in enumerate(blocked, start=1):
        lines.append(f"{index}. **{task.title}**")
        if task.description:
            lines.append(f"   📝 {task.description}")
        assignees = task.assignee_names()
        if assignees:
            lines.append(f"   👥 Asignado a: {', '.join(assignees)}")
        lines.append(f"   📅 Creada: {format_created_date(task)}")
        lines.append("")
    return _reply(
        "\n".join(lines),
        BLOCKED_SUGGESTIONS,
        "query_executed",
        {"blockedTasks": list(blocked)},
    )


def blocked_failed_reply(exc: BaseException) -> Reply:
    return _reply(f"❌ Error al consultar tareas bloqueadas: {error_detail(exc)}")


def no_busy_users_reply() -> Reply:
    return _reply(NO_BUSY_USERS_TEXT, NO_BUSY_USERS_SUGGESTIONS)


def busy_users_reply(stats: UserStats) -> Reply:
    """Workload table headed by the busiest user."""
    busiest = stats.most_busy_user
    lines = [
        "👥 **Estadísticas de Usuarios:**",
        "",
        f"🏆 Usuario más ocupado: **{busiest}** "
        f"({stats.tasks_per_user.get(busiest or '', 0)} tareas activas)",
        "",
        "📊 **Distribución de tareas:**",
    ]
    for name, count in rank_users_by_workload(stats.tasks_per_user):
        lines.append(f"• {workload_emoji(count)} {name}: {count} tareas")
    return _reply("\n".join(lines), BUSY_USER_SUGGESTIONS, "query_executed", stats)


def busy_users_failed_reply(exc: BaseException) -> Reply:
    return _reply(f"❌ Error al consultar estadísticas de usuarios: {error_detail(exc)}")


def greeting_reply(greeting: str) -> Reply:
    return _reply(greeting, GENERAL_SUGGESTIONS)


def unexpected_failure_reply(exc: BaseException) -> Reply:
    """Last-resort reply when something outside a handler's own guard failed."""
    return _reply(f"❌ Ocurrió un error inesperado al procesar tu mensaje: {error_detail(exc)}")


__all__ = [
    "Reply",
    "STATUS_EMOJIS",
    "DEFAULT_STATUS_EMOJI",
    "GREETINGS",
    "GENERAL_SUGGESTIONS",
    "NO_BLOCKED_TEXT",
    "NO_BUSY_USERS_TEXT",
    "TITLE_MISSING_TEXT",
    "error_detail",
    "status_emoji",
    "workload_emoji",
    "completion_rate",
    "format_created_date",
    "task_created_reply",
    "task_creation_failed_reply",
    "title_missing_reply",
    "status_report_reply",
    "status_failed_reply",
    "no_blocked_tasks_reply",
    "blocked_tasks_reply",
    "blocked_failed_reply",
    "no_busy_users_reply",
    "busy_users_reply",
    "busy_users_failed_reply",
    "greeting_reply",
    "unexpected_failure_reply",
]
