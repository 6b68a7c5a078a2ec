"""Handlers for read-only chat queries: status summary, blocked tasks, workload."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dobot_engine.core.intents import IntentType
from dobot_engine.core.logging import get_logger
from dobot_engine.core.ports import AnalyticsPort

from .. import response_synthesizer as rs
from ..intent_router import IntentRequest, IntentResponse

if TYPE_CHECKING:  # pragma: no cover - static typing aid
    from .. import ServiceContainer

logger = get_logger(__name__)


def _require_analytics(services: "ServiceContainer") -> AnalyticsPort:
    analytics = services.analytics
    if analytics is None:
        raise RuntimeError("AnalyticsPort has not been configured.")
    return analytics


async def handle_status_query(
    request: IntentRequest, services: "ServiceContainer"
) -> IntentResponse:
    """Report task totals per status and the completion rate."""

    _ = request
    try:
        summary = await _require_analytics(services).get_tasks_summary()
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.exception("Analytics aggregator failed to summarize tasks")
        return IntentResponse(intent=IntentType.STATUS_QUERY, reply=rs.status_failed_reply(exc))
    return IntentResponse(intent=IntentType.STATUS_QUERY, reply=rs.status_report_reply(summary))


async def handle_blocked_query(
    request: IntentRequest, services: "ServiceContainer"
) -> IntentResponse:
    """List every blocked task, or celebrate when there are none."""

    _ = request
    try:
        summary = await _require_analytics(services).get_tasks_summary()
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.exception("Analytics aggregator failed to list blocked tasks")
        return IntentResponse(intent=IntentType.BLOCKED_QUERY, reply=rs.blocked_failed_reply(exc))

    if not summary.blocked:
        return IntentResponse(intent=IntentType.BLOCKED_QUERY, reply=rs.no_blocked_tasks_reply())
    logger.info("Reporting %d blocked tasks", len(summary.blocked))
    return IntentResponse(
        intent=IntentType.BLOCKED_QUERY, reply=rs.blocked_tasks_reply(summary.blocked)
    )


async def handle_busy_user_query(
    request: IntentRequest, services: "ServiceContainer"
) -> IntentResponse:
    """Name the busiest user and show everyone's active task count."""

    _ = request
    try:
        stats = await _require_analytics(services).get_user_stats()
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.exception("Analytics aggregator failed to compute user stats")
        return IntentResponse(
            intent=IntentType.BUSY_USER_QUERY, reply=rs.busy_users_failed_reply(exc)
        )

    if stats.most_busy_user is None:
        return IntentResponse(intent=IntentType.BUSY_USER_QUERY, reply=rs.no_busy_users_reply())
    return IntentResponse(intent=IntentType.BUSY_USER_QUERY, reply=rs.busy_users_reply(stats))


__all__ = ["handle_status_query", "handle_blocked_query", "handle_busy_user_query"]
