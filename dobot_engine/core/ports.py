"""Protocol definitions for infrastructure adapters."""

# pylint: disable=unnecessary-ellipsis

from __future__ import annotations

from typing import Protocol, Sequence, TypeVar

from dobot_engine.core.models import Task, TaskStatus, TaskSummary, User, UserStats

T = TypeVar("T")


class TaskDirectoryPort(Protocol):
    """Port exposing task storage mutations and lookups."""

    async def create(
        self,
        title: str,
        description: str | None = None,
        status: TaskStatus = TaskStatus.CREATED,
        user_ids: Sequence[int] = (),
    ) -> Task:
        """Persist a new task and return it with its generated id."""
        ...

    async def get(self, task_id: int) -> Task:
        """Return the task identified by ``task_id``."""
        ...

    async def list_tasks(self) -> list[Task]:
        """Return every stored task in insertion order."""
        ...

    async def update(
        self,
        task_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        status: TaskStatus | None = None,
        user_ids: Sequence[int] | None = None,
    ) -> Task:
        """Apply the provided fields to ``task_id`` and return the result."""
        ...

    async def delete(self, task_id: int) -> None:
        """Remove the task identified by ``task_id``."""
        ...

    async def add_user(self, name: str, email: str | None = None) -> User:
        """Register a user that tasks can be assigned to."""
        ...

    async def list_users(self) -> list[User]:
        """Return every registered user."""
        ...


class AnalyticsPort(Protocol):
    """Port exposing on-demand aggregate reads over tasks and users."""

    async def get_tasks_summary(self) -> TaskSummary:
        """Return task totals, per-status counts, blocked and recently completed tasks."""
        ...

    async def get_user_stats(self) -> UserStats:
        """Return per-user active task counts and the busiest user."""
        ...


class ChoiceSource(Protocol):
    """Source of (pseudo-)random selection; ``random.Random`` satisfies it."""

    def choice(self, seq: Sequence[T]) -> T:
        """Return one element of ``seq``."""
        ...


__all__ = ["TaskDirectoryPort", "AnalyticsPort", "ChoiceSource"]
