from fastapi import APIRouter, status

from imgix_signer.schemas.health import HealthResponse
from imgix_signer.core.config import settings

API_VERSION = "1.0.0"

# Create a router for health check endpoints
router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="""
    Check the health status of the service.

    ## Response
    - status: "ok" when an imgix source is configured, "degraded" otherwise
    - version: API version
    - services: Status of individual services
    """,
)
async def health_check() -> HealthResponse:
    """Report whether URLs can be signed with the configured source."""
    configured = settings.is_imgix_configured()

    return HealthResponse(
        status="ok" if configured else "degraded",
        version=API_VERSION,
        services={"imgix": "configured" if configured else "unconfigured"},
    )
