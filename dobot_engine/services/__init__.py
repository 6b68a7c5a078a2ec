"""Application service layer for chat intent handling."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from dobot_engine.core.ports import AnalyticsPort, ChoiceSource, TaskDirectoryPort

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from .intent_router import IntentRouter


@dataclass(slots=True)
class ServiceContainer:
    """Aggregate of application-level services available to handlers."""

    task_directory: Optional[TaskDirectoryPort] = None
    analytics: Optional[AnalyticsPort] = None
    choice_source: ChoiceSource = field(default_factory=random.Random)
    intent_router: Optional["IntentRouter"] = None


def build_default_services(
    *,
    task_directory_port: Optional[TaskDirectoryPort] = None,
    analytics_port: Optional[AnalyticsPort] = None,
    choice_source: Optional[ChoiceSource] = None,
) -> ServiceContainer:
    """Return a service container with every chat intent handler registered."""

    # pylint: disable=import-outside-toplevel
    from .handler_registry import default_intent_handlers
    from .intent_router import IntentRouter

    intent_router = IntentRouter(default_intent_handlers())
    return ServiceContainer(
        task_directory=task_directory_port,
        analytics=analytics_port,
        choice_source=choice_source if choice_source is not None else random.Random(),
        intent_router=intent_router,
    )


__all__ = ["ServiceContainer", "build_default_services"]
