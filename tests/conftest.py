"""Pytest configuration: ensure env vars and import path are set early.

This runs before any tests, so modules can import without local path hacks.
The shared fakes below implement the task directory and analytics ports so
handler and processor tests never touch TinyDB.
"""
from __future__ import annotations

import os
import sys
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Sequence

import pytest
from dotenv import load_dotenv

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

load_dotenv(override=False)

# Keep the default TinyDB file and log files out of the working tree.
_TEST_DATA_DIR = tempfile.mkdtemp(prefix="dobot-tests-")
os.environ.setdefault("DATA_DIR", _TEST_DATA_DIR)
os.environ.setdefault("DOBOT_LOG_DIR", str(Path(_TEST_DATA_DIR) / "logs"))

# pylint: disable=wrong-import-position
from dobot_engine.core.models import (  # noqa: E402
    Task,
    TaskAssignment,
    TaskStatus,
    TaskSummary,
    User,
    UserStats,
)
from dobot_engine.services import ServiceContainer, build_default_services  # noqa: E402

FIXED_CREATED_AT = datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc)


class FakeTaskDirectory:
    """In-memory task directory recording every create call."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.created: list[dict[str, Any]] = []

    async def create(
        self,
        title: str,
        description: str | None = None,
        status: TaskStatus = TaskStatus.CREATED,
        user_ids: Sequence[int] = (),
    ) -> Task:
        self.created.append(
            {"title": title, "description": description, "status": status, "user_ids": user_ids}
        )
        if self.error is not None:
            raise self.error
        return Task(
            id=len(self.created),
            title=title,
            description=description,
            status=status,
            created_at=FIXED_CREATED_AT,
        )


class FakeAnalytics:
    """Analytics aggregator returning canned results and counting calls."""

    def __init__(
        self,
        summary: TaskSummary | None = None,
        stats: UserStats | None = None,
        error: Exception | None = None,
    ) -> None:
        self.summary = summary or TaskSummary(total=0)
        self.stats = stats or UserStats(total_users=0)
        self.error = error
        self.summary_calls = 0
        self.stats_calls = 0

    async def get_tasks_summary(self) -> TaskSummary:
        self.summary_calls += 1
        if self.error is not None:
            raise self.error
        return self.summary

    async def get_user_stats(self) -> UserStats:
        self.stats_calls += 1
        if self.error is not None:
            raise self.error
        return self.stats


class FixedChoice:
    """Deterministic choice source always picking the same index."""

    def __init__(self, index: int = 0) -> None:
        self.index = index
        self.calls = 0

    def choice(self, seq):  # type: ignore[no-untyped-def]
        self.calls += 1
        return seq[self.index]


def make_task(
    task_id: int,
    title: str,
    status: TaskStatus = TaskStatus.CREATED,
    *,
    description: str | None = None,
    assignees: Sequence[str] = (),
    created_at: datetime = FIXED_CREATED_AT,
) -> Task:
    """Build a task whose assignees get sequential user ids."""
    assignments = [
        TaskAssignment(
            id=index,
            user_id=index,
            assigned_at=created_at,
            user=User(id=index, name=name),
        )
        for index, name in enumerate(assignees, start=1)
    ]
    return Task(
        id=task_id,
        title=title,
        description=description,
        status=status,
        created_at=created_at,
        assignments=assignments,
    )


@pytest.fixture
def make_services() -> Callable[..., ServiceContainer]:
    """Factory returning a fully routed container around the given fakes."""

    def _make(
        task_directory: Any = None,
        analytics: Any = None,
        choice_source: Any = None,
    ) -> ServiceContainer:
        if task_directory is None:
            task_directory = FakeTaskDirectory()
        if analytics is None:
            analytics = FakeAnalytics()
        if choice_source is None:
            choice_source = FixedChoice()
        return build_default_services(
            task_directory_port=task_directory,
            analytics_port=analytics,
            choice_source=choice_source,
        )

    return _make
