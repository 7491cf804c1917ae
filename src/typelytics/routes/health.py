"""Health check endpoints for liveness and readiness probes."""
from typing import Literal

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from typelytics.client import PostHog

router = APIRouter(prefix="/health", tags=["health"])


class LivenessResponse(BaseModel):
    """Response model for liveness probe.

    Attributes:
        status: Always 'alive' when process is running.
    """

    status: Literal["alive"]


class ReadinessCheck(BaseModel):
    """Individual dependency check result.

    Attributes:
        name: Identifier for the dependency being checked.
        status: Result of the check ('ok' or 'failed').
        message: Error details when status is 'failed'.
    """

    name: str
    status: Literal["ok", "failed"]
    message: str | None = None


class ReadinessResponse(BaseModel):
    """Response model for readiness probe.

    Attributes:
        status: Overall readiness ('ready' or 'not_ready').
        checks: List of individual dependency check results.
    """

    status: Literal["ready", "not_ready"]
    checks: list[ReadinessCheck]


def _check_posthog(posthog: PostHog | None) -> ReadinessCheck:
    """Verify the PostHog client could be configured."""
    if posthog is None:
        return ReadinessCheck(
            name="posthog",
            status="failed",
            message="PostHog API key or project id is not configured",
        )
    return ReadinessCheck(name=f"posthog:{posthog.config.project_id}", status="ok")


def _check_catalog(posthog: PostHog | None) -> ReadinessCheck:
    """Verify the event catalog declares at least one event."""
    if posthog is None or len(posthog.events) == 0:
        return ReadinessCheck(
            name="catalog",
            status="failed",
            message="Event catalog is empty",
        )
    return ReadinessCheck(name="catalog", status="ok")


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness probe endpoint.

    Returns:
        Liveness status response.
    """
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> JSONResponse:
    """Readiness probe endpoint.

    Returns 200 when the PostHog client is configured and the event catalog
    is non-empty, 503 otherwise.

    Args:
        request: FastAPI request (provides access to app state).

    Returns:
        Readiness status with individual check results.
    """
    posthog: PostHog | None = request.app.state.posthog
    checks = [_check_posthog(posthog), _check_catalog(posthog)]
    all_ok = all(c.status == "ok" for c in checks)
    response = ReadinessResponse(
        status="ready" if all_ok else "not_ready",
        checks=checks,
    )
    code = status.HTTP_200_OK if all_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=response.model_dump(), status_code=code)
