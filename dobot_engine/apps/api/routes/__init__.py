"""Router namespace exports for FastAPI include hooks."""

from . import chat, health, tasks

__all__ = ["chat", "health", "tasks"]
