"""Application bootstrap helpers for assembling the service container."""

from __future__ import annotations

from dobot_engine.adapters.task_store import AnalyticsAdapter, TaskStoreAdapter
from dobot_engine.services import ServiceContainer, build_default_services


def build_default_service_container() -> ServiceContainer:
    """Return the default service container wired to the TinyDB task store."""

    store = TaskStoreAdapter()
    return build_default_services(
        task_directory_port=store,
        analytics_port=AnalyticsAdapter(store),
    )


__all__ = ["build_default_service_container"]
