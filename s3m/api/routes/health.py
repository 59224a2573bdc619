"""
Health check endpoints.

- /health: liveness (is the process running?)
- /health/ready: readiness (is the configuration valid and the bucket reachable?)

These are registered whether or not the presign endpoints are enabled.
"""

import logging
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ... import __version__
from ...infrastructure.storage.client import StartupError, verify_bucket_access
from ..dependencies import SettingsDep, StorageClientsDep

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    details: dict[str, Any] = {}


class ReadinessCheck(BaseModel):
    """Individual readiness check result."""
    name: str
    status: str  # "ok" or "error"
    error: str | None = None


class ReadinessResponse(BaseModel):
    """Readiness check response with details."""
    status: str  # "ready" or "not_ready"
    version: str
    checks: list[ReadinessCheck]


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns 200 if the service is running. Does not check dependencies.",
)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """Liveness check. Fast, never touches storage."""
    return HealthResponse(
        status="ok",
        version=__version__,
        details={
            "bucket": settings.bucket.name,
            "autoendpoint": settings.autoendpoint,
        }
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
    description="Returns 200 if the service can handle traffic. Checks the bucket.",
    responses={
        503: {
            "description": "Service not ready",
            "model": ReadinessResponse,
        }
    },
)
def readiness_check(
    settings: SettingsDep,
    clients: StorageClientsDep,
):
    """
    Readiness check - can we serve traffic?

    Re-validates configuration and repeats the HEAD bucket call made at
    startup. Returns 503 if either fails.

    Sync handler: FastAPI runs it in the threadpool.
    """
    checks: list[ReadinessCheck] = []
    all_ok = True

    missing_fields = settings.validate_required_fields()
    if missing_fields:
        checks.append(ReadinessCheck(
            name="configuration",
            status="error",
            error=f"Missing required fields: {', '.join(missing_fields)}"
        ))
        all_ok = False
    else:
        checks.append(ReadinessCheck(name="configuration", status="ok"))

    try:
        verify_bucket_access(clients.s3_client, settings.bucket.name)
        checks.append(ReadinessCheck(name="bucket", status="ok"))
    except StartupError as e:
        checks.append(ReadinessCheck(
            name="bucket",
            status="error",
            error=str(e)
        ))
        all_ok = False

    response = ReadinessResponse(
        status="ready" if all_ok else "not_ready",
        version=__version__,
        checks=checks,
    )

    if not all_ok:
        logger.warning(
            "Readiness check failed",
            extra={
                "checks": [
                    {"name": c.name, "status": c.status, "error": c.error}
                    for c in checks
                ]
            }
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(),
        )

    return response
