"""Core data transfer objects shared across layers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase JSON keys while keeping snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskStatus(str, Enum):
    """Lifecycle states a task can be in."""

    CREATED = "Created"
    IN_PROGRESS = "InProgress"
    BLOCKED = "Blocked"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


INACTIVE_STATUSES = frozenset({TaskStatus.COMPLETED, TaskStatus.CANCELLED})


class User(CamelModel):
    """A person tasks can be assigned to."""

    id: int
    name: str
    email: str | None = None


class TaskAssignment(CamelModel):
    """Link between a task and one assigned user."""

    id: int
    user_id: int
    assigned_at: datetime
    user: User


class Task(CamelModel):
    """Task entity as returned by the task directory."""

    id: int
    title: str = Field(min_length=1)
    description: str | None = None
    status: TaskStatus = TaskStatus.CREATED
    created_at: datetime
    assignments: list[TaskAssignment] = Field(default_factory=list)

    def is_active(self) -> bool:
        """True while the task still counts toward its assignees' workload."""
        return self.status not in INACTIVE_STATUSES

    def assignee_names(self) -> list[str]:
        """Return the display names of everyone assigned to the task."""
        return [assignment.user.name for assignment in self.assignments]


class TaskSummary(CamelModel):
    """Cross-task aggregate produced by the analytics aggregator."""

    total: int = Field(ge=0)
    by_status: dict[str, int] = Field(default_factory=dict)
    blocked: list[Task] = Field(default_factory=list)
    recently_completed: list[Task] = Field(default_factory=list)

    @model_validator(mode="after")
    def _status_counts_match_total(self) -> "TaskSummary":
        counted = sum(self.by_status.values())
        if counted != self.total:
            raise ValueError(f"status counts sum to {counted}, expected total {self.total}")
        return self

    def count_for(self, status: TaskStatus) -> int:
        """Return the number of tasks in ``status`` (zero when absent)."""
        return self.by_status.get(status.value, 0)


class UserStats(CamelModel):
    """Cross-user workload aggregate produced by the analytics aggregator."""

    total_users: int = Field(ge=0)
    tasks_per_user: dict[str, int] = Field(default_factory=dict)
    most_busy_user: str | None = None

    @model_validator(mode="after")
    def _busy_user_present_iff_users(self) -> "UserStats":
        if (self.most_busy_user is None) != (not self.tasks_per_user):
            raise ValueError("most_busy_user must be set exactly when tasks_per_user is non-empty")
        if self.most_busy_user is not None and self.most_busy_user not in self.tasks_per_user:
            raise ValueError(f"most_busy_user {self.most_busy_user!r} missing from tasks_per_user")
        return self


@dataclass(frozen=True, slots=True)
class Title:
    """Successful title extraction."""

    text: str


@dataclass(frozen=True, slots=True)
class NoMatch:
    """No extractor produced a usable title."""


NO_MATCH = NoMatch()

ExtractionResult = Union[Title, NoMatch]


__all__ = [
    "CamelModel",
    "TaskStatus",
    "INACTIVE_STATUSES",
    "User",
    "TaskAssignment",
    "Task",
    "TaskSummary",
    "UserStats",
    "Title",
    "NoMatch",
    "NO_MATCH",
    "ExtractionResult",
]
