"""Health and readiness routes."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from dobot_engine.core.api_models import HealthResponse

from ..dependencies import require_healthcheck_token

router = APIRouter()


@router.get("/")
def read_root() -> dict[str, str]:
    """Health/info endpoint with a short usage message."""
    return {"message": "DoBot API. Refer to /docs for available endpoints."}


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Unauthenticated liveness probe echoing the server clock."""
    return HealthResponse(status="OK", timestamp=datetime.now(timezone.utc))


@router.get("/alive")
async def alive_check(_: None = Depends(require_healthcheck_token)) -> JSONResponse:
    """Token-guarded health check endpoint for infrastructure probes."""
    return JSONResponse({"status": "ok", "message": "DoBot is alive and healthy."})


__all__ = ["router"]
