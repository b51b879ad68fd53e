"""
Signed URL API Endpoints
Expose the imgix URL builders to services that cannot embed the library
"""

from fastapi import APIRouter, status

from imgix_signer.schemas.url import ProxyURLRequest, SignedURLRequest, SignedURLResponse
from imgix_signer.services.imgix import imgix_service
from imgix_signer.core.logging import get_logger

# Create router
router = APIRouter(tags=["urls"])
logger = get_logger("urls_api")


@router.post(
    "/url",
    response_model=SignedURLResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign an imgix URL",
    description="Generate a signed URL for an image hosted on the configured imgix source",
)
async def sign_url(request: SignedURLRequest) -> SignedURLResponse:
    """Generate a signed imgix URL."""
    signed_url = imgix_service.url(request.path, request.params)
    logger.info(f"Signed URL request for {request.path}")
    return SignedURLResponse(url=signed_url)


@router.post(
    "/proxy-url",
    response_model=SignedURLResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign an imgix proxy URL",
    description="""
    Generate a signed URL that has imgix fetch and process a public image.

    The image URL is percent-encoded into a single path segment, so the
    configured source must be an imgix Web Proxy source.
    """,
)
async def sign_proxy_url(request: ProxyURLRequest) -> SignedURLResponse:
    """Generate a signed imgix proxy URL."""
    signed_url = imgix_service.proxy_url(request.url, request.params)
    logger.info(f"Signed proxy URL request for {request.url}")
    return SignedURLResponse(url=signed_url)
