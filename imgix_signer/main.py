from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from imgix_signer.api.health import router as health_router, API_VERSION
from imgix_signer.api.urls import router as urls_router
from imgix_signer.core.config import settings
from imgix_signer.core.errors import HTTP_500_INTERNAL_SERVER_ERROR, ImgixSignerError, get_error_response
from imgix_signer.core.logging import get_logger, setup_logging

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for the FastAPI application."""
    setup_logging()
    logger.info(f"Starting imgix-signer service (imgix configured: {settings.is_imgix_configured()})")

    yield

    logger.info("imgix-signer service stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="imgix-signer API",
        description="""
        # imgix-signer API

        Generates signed imgix URLs for images on an imgix source, or for
        public images fetched through an imgix Web Proxy source.
        """,
        version=API_VERSION,
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "urls",
                "description": "Operations for generating signed imgix URLs"
            },
            {
                "name": "health",
                "description": "Operations for checking the health and status of the service"
            }
        ],
    )

    @app.exception_handler(ImgixSignerError)
    async def imgix_signer_error_handler(request: Request, exc: ImgixSignerError):
        exc.context.update({
            "method": request.method,
            "path": request.url.path
        })
        logger.error(f"{exc.error_code}: {exc.message}")

        return JSONResponse(
            status_code=exc.http_status,
            content=get_error_response(exc)
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled {type(exc).__name__} in {request.method} {request.url.path}")

        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=get_error_response(exc)
        )

    # Include API routers
    app.include_router(urls_router)
    app.include_router(health_router)

    return app


app = create_app()
