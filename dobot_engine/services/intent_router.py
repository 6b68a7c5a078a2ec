"""Intent router and supporting request/response models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable, Mapping, MutableMapping

from dobot_engine.core.api_models import ChatContext
from dobot_engine.core.intents import IntentType
from dobot_engine.core.models import ExtractionResult

from .response_synthesizer import Reply

if TYPE_CHECKING:  # pragma: no cover - import for static analysis only
    from . import ServiceContainer


@dataclass(slots=True)
class IntentRequest:
    """Classified chat message handed to exactly one handler."""

    intent: IntentType
    message: str
    normalized_message: str
    extraction: ExtractionResult | None = None
    user_id: int | None = None
    context: ChatContext | None = None


@dataclass(slots=True)
class IntentResponse:
    """Uniform handler response structure for the command processor."""

    intent: IntentType
    reply: Reply


IntentHandler = Callable[[IntentRequest, "ServiceContainer"], Awaitable[IntentResponse]]


class IntentRouterError(RuntimeError):
    """Base error for router failures."""


class IntentHandlerNotFoundError(IntentRouterError):
    """Raised when no handler is registered for the requested intent."""


class IntentRouter:
    """Dispatch intents to registered handlers."""

    def __init__(self, handlers: Mapping[IntentType, IntentHandler] | None = None) -> None:
        self._handlers: MutableMapping[IntentType, IntentHandler] = dict(handlers or {})

    def register(self, intent: IntentType, handler: IntentHandler) -> None:
        """Register or replace a handler for ``intent``."""

        self._handlers[intent] = handler

    def unregister(self, intent: IntentType) -> None:
        """Remove a handler if present."""

        self._handlers.pop(intent, None)

    async def dispatch(
        self, request: IntentRequest, services: "ServiceContainer"
    ) -> IntentResponse:
        """Invoke the handler for ``request.intent`` with the provided services."""

        try:
            handler = self._handlers[request.intent]
        except KeyError as exc:
            raise IntentHandlerNotFoundError(
                f"No handler registered for intent {request.intent.value}"
            ) from exc
        return await handler(request, services)

    def handlers(self) -> Mapping[IntentType, IntentHandler]:
        """Return a shallow copy of the current intent handler registry."""

        return dict(self._handlers)


__all__ = [
    "IntentRouter",
    "IntentRouterError",
    "IntentHandlerNotFoundError",
    "IntentHandler",
    "IntentRequest",
    "IntentResponse",
]
