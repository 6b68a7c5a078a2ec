"""Chat endpoint handing messages to the command processor."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from dobot_engine.apps.api.dependencies import get_service_container
from dobot_engine.core.api_models import ChatMessageInput, ChatResponseOutput
from dobot_engine.core.logging import get_logger
from dobot_engine.services import ServiceContainer
from dobot_engine.services.command_processor import process_message

router = APIRouter(prefix="/api", tags=["chat"])
logger = get_logger(__name__)


@router.post(
    "/chat",
    response_model=ChatResponseOutput,
    response_model_exclude_none=True,
)
async def chat(
    message_input: ChatMessageInput,
    services: Annotated[ServiceContainer, Depends(get_service_container)],
) -> ChatResponseOutput:
    """Answer a chat message. Failures are reported in the reply text, never as 5xx."""
    logger.info("Chat message received (%d chars)", len(message_input.message))
    return await process_message(message_input, services)


__all__ = ["router"]
