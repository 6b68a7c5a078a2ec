"""Keyword rule table mapping normalized chat messages to intents.

Rules are evaluated top to bottom and the first rule with any keyword
contained in the message wins, so a message mentioning both "crear" and
"estado" is a task creation request. Matching is plain substring
containment: "agregar" inside a longer word still counts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from dobot_engine.core.intents import IntentType
from dobot_engine.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class IntentRule:
    """One row of the classification table."""

    intent: IntentType
    keywords: tuple[str, ...]

    def matches(self, normalized_message: str) -> bool:
        """True when any keyword occurs anywhere in ``normalized_message``."""
        return any(keyword in normalized_message for keyword in self.keywords)


INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        IntentType.CREATE_TASK,
        ("crear", "create", "nueva tarea", "new task", "agregar", "add"),
    ),
    IntentRule(
        IntentType.STATUS_QUERY,
        ("estado", "status", "progreso", "progress", "cuántas", "how many", "resumen"),
    ),
    IntentRule(
        IntentType.BLOCKED_QUERY,
        ("bloqueadas", "blocked", "bloqueada", "impedidas"),
    ),
    IntentRule(
        IntentType.BUSY_USER_QUERY,
        ("más tareas", "most tasks", "ocupado", "busy", "carga", "usuario"),
    ),
)

FALLBACK_INTENT = IntentType.GENERAL


def classify_intent(
    normalized_message: str, rules: Sequence[IntentRule] = INTENT_RULES
) -> IntentType:
    """Return the first intent whose rule matches, or the general fallback."""
    for rule in rules:
        if rule.matches(normalized_message):
            logger.debug("Message classified as %s", rule.intent.value)
            return rule.intent
    logger.debug("No keyword rule matched; using %s", FALLBACK_INTENT.value)
    return FALLBACK_INTENT


__all__ = ["IntentRule", "INTENT_RULES", "FALLBACK_INTENT", "classify_intent"]
