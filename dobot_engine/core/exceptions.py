"""Core exception types shared across layers."""


class TaskDirectoryError(Exception):
    """Base error raised by task directory implementations."""


class TaskNotFoundError(TaskDirectoryError):
    """Raised when attempting to read, update, or delete a missing task."""


class UserNotFoundError(TaskDirectoryError):
    """Raised when assigning a task to a user id that does not exist."""


class TaskValidationError(TaskDirectoryError):
    """Raised when a task payload violates a domain rule (e.g. blank title)."""


__all__ = [
    "TaskDirectoryError",
    "TaskNotFoundError",
    "UserNotFoundError",
    "TaskValidationError",
]
