"""Task CRUD endpoints backed by the task directory."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from dobot_engine.apps.api.dependencies import get_task_directory
from dobot_engine.core.api_models import TaskCreateRequest, TaskUpdateRequest
from dobot_engine.core.exceptions import (
    TaskNotFoundError,
    TaskValidationError,
    UserNotFoundError,
)
from dobot_engine.core.logging import get_logger
from dobot_engine.core.models import Task
from dobot_engine.core.ports import TaskDirectoryPort

router = APIRouter(prefix="/api/tasks", tags=["tasks"])
logger = get_logger(__name__)

TaskDirectory = Annotated[TaskDirectoryPort, Depends(get_task_directory)]


def _not_found(exc: TaskNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _bad_request(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("", response_model=list[Task])
async def list_tasks(tasks: TaskDirectory) -> list[Task]:
    """Return every task in creation order."""
    return await tasks.list_tasks()


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: int, tasks: TaskDirectory) -> Task:
    """Return a single task."""
    try:
        return await tasks.get(task_id)
    except TaskNotFoundError as exc:
        raise _not_found(exc) from exc


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(payload: TaskCreateRequest, tasks: TaskDirectory) -> Task:
    """Create a task, optionally assigning users."""
    try:
        task = await tasks.create(
            title=payload.title,
            description=payload.description,
            status=payload.status,
            user_ids=payload.user_ids,
        )
    except (TaskValidationError, UserNotFoundError) as exc:
        raise _bad_request(exc) from exc
    logger.info("Task %s created via API", task.id)
    return task


@router.put("/{task_id}", response_model=Task)
async def update_task(task_id: int, payload: TaskUpdateRequest, tasks: TaskDirectory) -> Task:
    """Update a task. Only provided fields are changed."""
    try:
        return await tasks.update(
            task_id,
            title=payload.title,
            description=payload.description,
            status=payload.status,
            user_ids=payload.user_ids,
        )
    except TaskNotFoundError as exc:
        raise _not_found(exc) from exc
    except (TaskValidationError, UserNotFoundError) as exc:
        raise _bad_request(exc) from exc


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: int, tasks: TaskDirectory) -> Response:
    """Delete a task."""
    try:
        await tasks.delete(task_id)
    except TaskNotFoundError as exc:
        raise _not_found(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
