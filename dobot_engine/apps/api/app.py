"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from dobot_engine import DOBOT_VERSION
from dobot_engine.apps.api.middleware import CorrelationIdMiddleware
from dobot_engine.core.logging import get_logger
from dobot_engine.services import ServiceContainer, runtime

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register the app's service container for the lifetime of the server."""
    logger.info("Initializing DoBot engine...")
    services = getattr(app.state, "services", None)
    if isinstance(services, ServiceContainer):
        runtime.set_services(services)
    logger.info("DoBot engine ready.")
    yield
    logger.info("DoBot engine shutting down.")


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    """Build the FastAPI application with configured routers."""
    if services is None:
        raise RuntimeError("Service container must be provided when creating the app.")
    app = FastAPI(
        title="DoBot API",
        description="Task board with a conversational assistant",
        version=DOBOT_VERSION,
        lifespan=lifespan,
    )
    app.state.services = services
    runtime.set_services(services)
    app.add_middleware(CorrelationIdMiddleware)

    # Import lazily to avoid potential circular imports when routers grow.
    from .routes import chat, health, tasks  # pylint: disable=import-outside-toplevel

    app.include_router(health.router)
    app.include_router(chat.router)
    app.include_router(tasks.router)
    return app


__all__ = ["create_app", "lifespan"]
