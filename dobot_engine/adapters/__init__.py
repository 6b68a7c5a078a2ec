"""Infrastructure adapter exports."""

from dobot_engine.core.exceptions import (  # noqa: F401
    TaskNotFoundError,
    TaskValidationError,
    UserNotFoundError,
)

from .task_store import AnalyticsAdapter, TaskStoreAdapter

__all__ = [
    "AnalyticsAdapter",
    "TaskStoreAdapter",
    "TaskNotFoundError",
    "TaskValidationError",
    "UserNotFoundError",
]
