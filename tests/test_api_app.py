"""Tests for FastAPI app factory."""
# pylint: disable=missing-function-docstring

import asyncio

import pytest

from dobot_engine.apps.api.app import create_app, lifespan
from dobot_engine.services import build_default_services, runtime


def test_create_app_has_routes():
    app = create_app(build_default_services())
    paths = {
        path
        for route in app.router.routes
        if (path := getattr(route, "path", getattr(route, "path_format", "")))
    }
    assert {"/", "/health", "/alive", "/api/chat", "/api/tasks", "/api/tasks/{task_id}"} <= paths
    assert hasattr(app.state, "services")
    assert app.state.services.intent_router is not None


def test_create_app_requires_services():
    with pytest.raises(RuntimeError):
        create_app()


def test_lifespan_registers_services():
    services = build_default_services()
    app = create_app(services)
    runtime.clear_services()

    async def _exercise() -> None:
        async with lifespan(app):
            assert runtime.get_services() is services

    asyncio.run(_exercise())


def test_default_factory_wires_task_store():
    from dobot_engine.adapters.task_store import AnalyticsAdapter, TaskStoreAdapter
    from dobot_engine.api_factory import create_app as create_default_app

    app = create_default_app()

    assert isinstance(app.state.services.task_directory, TaskStoreAdapter)
    assert isinstance(app.state.services.analytics, AnalyticsAdapter)
