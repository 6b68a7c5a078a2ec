"""Shared FastAPI dependencies for token validation and service access."""

import hmac
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status

from dobot_engine.core.config import config
from dobot_engine.core.ports import TaskDirectoryPort
from dobot_engine.services import ServiceContainer, runtime


async def require_healthcheck_token(
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
) -> None:
    """Bearer token guard for the infrastructure health probe."""
    if not config.ENABLE_HEALTHCHECK_AUTH:
        return
    expected = config.HEALTHCHECK_API_TOKEN
    if not expected:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token not configured",
            headers={"WWW-Authenticate": "Bearer"},
        )

    provided = None
    if authorization and authorization.lower().startswith("bearer "):
        provided = authorization.split(" ", 1)[1].strip()
    if not provided:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not hmac.compare_digest(provided, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_service_container() -> ServiceContainer:
    """Resolve the globally configured service container."""
    try:
        return runtime.get_services()
    except RuntimeError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Service container not configured",
        ) from exc


def get_task_directory(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> TaskDirectoryPort:
    """Return the task directory bound to the active container."""
    if container.task_directory is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Task directory is unavailable",
        )
    return container.task_directory


__all__ = [
    "get_service_container",
    "get_task_directory",
    "require_healthcheck_token",
]
