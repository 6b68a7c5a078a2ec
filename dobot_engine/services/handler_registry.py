"""Default mapping from chat intents to their handlers."""

from __future__ import annotations

from dobot_engine.core.intents import IntentType

from .intent_router import IntentHandler
from .intents.general_intents import handle_general
from .intents.query_intents import (
    handle_blocked_query,
    handle_busy_user_query,
    handle_status_query,
)
from .intents.task_intents import handle_create_task


def default_intent_handlers() -> dict[IntentType, IntentHandler]:
    """Return a fresh registry covering every member of :class:`IntentType`."""
    return {
        IntentType.CREATE_TASK: handle_create_task,
        IntentType.STATUS_QUERY: handle_status_query,
        IntentType.BLOCKED_QUERY: handle_blocked_query,
        IntentType.BUSY_USER_QUERY: handle_busy_user_query,
        IntentType.GENERAL: handle_general,
    }


__all__ = ["default_intent_handlers"]
