"""Handler for messages that match no task keyword."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dobot_engine.core.intents import IntentType

from .. import response_synthesizer as rs
from ..intent_router import IntentRequest, IntentResponse

if TYPE_CHECKING:  # pragma: no cover - static typing aid
    from .. import ServiceContainer


async def handle_general(request: IntentRequest, services: "ServiceContainer") -> IntentResponse:
    """Introduce the assistant with one of the canned greetings."""

    _ = request
    greeting = services.choice_source.choice(rs.GREETINGS)
    return IntentResponse(intent=IntentType.GENERAL, reply=rs.greeting_reply(greeting))


__all__ = ["handle_general"]
