"""Handler for chat requests that create a task."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dobot_engine.core.config import config
from dobot_engine.core.intents import IntentType
from dobot_engine.core.logging import get_logger
from dobot_engine.core.models import TaskStatus, Title
from dobot_engine.core.ports import TaskDirectoryPort

from .. import response_synthesizer as rs
from ..entity_extraction import extract_task_title
from ..intent_router import IntentRequest, IntentResponse

if TYPE_CHECKING:  # pragma: no cover - static typing aid
    from .. import ServiceContainer

logger = get_logger(__name__)


def _require_task_directory(services: "ServiceContainer") -> TaskDirectoryPort:
    task_directory = services.task_directory
    if task_directory is None:
        raise RuntimeError("TaskDirectoryPort has not been configured.")
    return task_directory


async def handle_create_task(
    request: IntentRequest, services: "ServiceContainer"
) -> IntentResponse:
    """Create a task from the extracted title, or ask the user for one."""

    extraction = request.extraction
    if extraction is None:
        extraction = extract_task_title(request.message)
    if not isinstance(extraction, Title):
        logger.info("Task creation requested without an extractable title")
        return IntentResponse(intent=IntentType.CREATE_TASK, reply=rs.title_missing_reply())

    title = extraction.text
    try:
        task = await _require_task_directory(services).create(
            title=title,
            description=config.ASSISTANT_TASK_DESCRIPTION,
            status=TaskStatus.CREATED,
        )
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.exception("Task directory failed to create task %r", title)
        return IntentResponse(
            intent=IntentType.CREATE_TASK, reply=rs.task_creation_failed_reply(title, exc)
        )

    logger.info("Created task %s from chat", task.id)
    return IntentResponse(intent=IntentType.CREATE_TASK, reply=rs.task_created_reply(task))


__all__ = ["handle_create_task"]
