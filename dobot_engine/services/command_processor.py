"""Single-turn chat command processing.

``process_message`` turns one chat message into one reply: normalize the
text, classify it with the keyword rule table, extract a title for creation
requests, dispatch to the matching handler, and stamp the reply. It is a
total function over validated input; every failure below it becomes reply
text instead of an exception.
"""

from __future__ import annotations

from datetime import datetime, timezone

from dobot_engine.core.api_models import ChatMessageInput, ChatResponseOutput
from dobot_engine.core.intents import IntentType
from dobot_engine.core.logging import get_logger, log_user_id_context

from . import ServiceContainer
from . import response_synthesizer as rs
from .entity_extraction import extract_task_title
from .intent_classifier import classify_intent
from .intent_router import IntentRequest, IntentRouter
from .preprocessing import normalize_message

logger = get_logger(__name__)


def _require_router(services: ServiceContainer) -> IntentRouter:
    router = services.intent_router
    if router is None:
        raise RuntimeError("IntentRouter has not been configured.")
    return router


def build_intent_request(message_input: ChatMessageInput) -> IntentRequest:
    """Normalize, classify, and (for creation requests) extract a title."""
    normalized = normalize_message(message_input.message)
    intent = classify_intent(normalized)
    extraction = (
        extract_task_title(message_input.message) if intent is IntentType.CREATE_TASK else None
    )
    return IntentRequest(
        intent=intent,
        message=message_input.message,
        normalized_message=normalized,
        extraction=extraction,
        user_id=message_input.user_id,
        context=message_input.context,
    )


def _stamp(reply: rs.Reply) -> ChatResponseOutput:
    return ChatResponseOutput(
        response=reply.text,
        action_taken=reply.action,
        suggestions=reply.suggestions,
        timestamp=datetime.now(timezone.utc),
    )


async def process_message(
    message_input: ChatMessageInput, services: ServiceContainer
) -> ChatResponseOutput:
    """Answer one chat message; never raises."""

    user_tag = str(message_input.user_id) if message_input.user_id is not None else None
    with log_user_id_context(user_tag):
        try:
            request = build_intent_request(message_input)
            logger.info(
                "Processing chat message",
                extra={"intent": request.intent.value, "chat_context": request.context},
            )
            response = await _require_router(services).dispatch(request, services)
            reply = response.reply
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.exception("Unexpected failure while processing chat message")
            reply = rs.unexpected_failure_reply(exc)
        return _stamp(reply)


__all__ = ["build_intent_request", "process_message"]
