"""Intent types recognized by the chat command processor."""

from enum import Enum


class IntentType(str, Enum):
    """Enumeration of all supported chat intents."""

    CREATE_TASK = "create-task"
    STATUS_QUERY = "status-query"
    BLOCKED_QUERY = "blocked-query"
    BUSY_USER_QUERY = "busy-user-query"
    GENERAL = "general"


__all__ = ["IntentType"]
