"""API request/response models for the chat and task endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field, field_validator

from dobot_engine.core.models import CamelModel, TaskStatus

ActionType = Literal["task_created", "task_updated", "query_executed"]
ChatContext = Literal["tasks", "general", "help"]


class ChatMessageInput(CamelModel):
    """Request model for POST /api/chat."""

    message: str = Field(..., min_length=1, description="Free-text message from the user")
    user_id: int | None = Field(default=None, description="Optional id of the sending user")
    context: ChatContext | None = Field(
        default=None,
        description="Optional conversation area; accepted but not used for routing",
    )

    @field_validator("message")
    @classmethod
    def _message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message is required")
        return value


class ActionTaken(CamelModel):
    """Metadata describing a side effect or query performed while answering."""

    type: ActionType
    data: Any = None


class ChatResponseOutput(CamelModel):
    """Response model for POST /api/chat."""

    response: str = Field(..., description="Assistant reply text")
    action_taken: ActionTaken | None = Field(default=None)
    suggestions: list[str] | None = Field(default=None, description="Follow-up prompts")
    timestamp: datetime = Field(..., description="When the response was produced (UTC)")


class TaskCreateRequest(CamelModel):
    """Request model for POST /api/tasks."""

    title: str = Field(..., min_length=1)
    description: str | None = None
    status: TaskStatus = TaskStatus.CREATED
    user_ids: list[int] = Field(default_factory=list)


class TaskUpdateRequest(CamelModel):
    """Request model for PUT /api/tasks/{task_id}. Only provided fields change."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: TaskStatus | None = None
    user_ids: list[int] | None = None


class HealthResponse(CamelModel):
    """Response model for GET /health."""

    status: str
    timestamp: datetime


__all__ = [
    "ActionType",
    "ChatContext",
    "ChatMessageInput",
    "ActionTaken",
    "ChatResponseOutput",
    "TaskCreateRequest",
    "TaskUpdateRequest",
    "HealthResponse",
]
