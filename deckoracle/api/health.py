"""
Health check endpoints.

Provides liveness and readiness probes; readiness requires a loaded catalog.
"""

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel

from deckoracle.api.dependencies import get_loaded_catalog

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    catalog: str | None = None
    card_count: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(request: Request, response: Response) -> HealthResponse:
    """
    Readiness probe.

    Returns ready once the card catalog is loaded, 503 otherwise.
    """
    catalog = get_loaded_catalog(request)
    if catalog is None:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", catalog="unavailable")
    return HealthResponse(status="ready", catalog="loaded", card_count=len(catalog))
