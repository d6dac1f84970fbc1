"""notion_blog API - Main FastAPI Application.

Serves the blog rendered from the Notion database:
- HTML index and single-post pages
- JSON post list under /api/v1/posts
- Health check

Usage:
    # Run with uvicorn
    uvicorn notion_blog.api.main:app --reload
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.responses import JSONResponse

from notion_blog import __version__
from notion_blog.api.dependencies import reset_dependencies
from notion_blog.api.models import ErrorResponse
from notion_blog.api.routes.health import router as health_router
from notion_blog.api.routes.posts import api_router as posts_api_router
from notion_blog.api.routes.posts import pages_router
from notion_blog.config.settings import get_settings
from notion_blog.core.exceptions import CollectorError, ConfigurationError

logger = structlog.get_logger(__name__)

API_TITLE = "notion_blog"
API_DESCRIPTION = "Blog posts rendered from a Notion database."


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    The collector is created lazily on the first request; shutdown closes
    its HTTP client.
    """
    settings = get_settings()
    logger.info(
        "application_starting",
        environment=settings.app_env,
        database_id=settings.notion_database_id,
        block_fetch_policy=settings.block_fetch_policy,
    )

    yield

    logger.info("application_stopping")
    await reset_dependencies()
    logger.info("application_stopped")


def _error_response(
    request: Request, status_code: int, error: str, message: str, exc: Exception
) -> JSONResponse:
    response = ErrorResponse(
        error=error,
        message=message,
        detail=str(exc) if get_settings().debug else None,
        path=request.url.path,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(CollectorError)
    async def collector_exception_handler(
        request: Request, exc: CollectorError
    ) -> JSONResponse:
        """Notion could not be reached or rejected the request."""
        logger.error(
            "notion_fetch_failed",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(
            request,
            status.HTTP_502_BAD_GATEWAY,
            "upstream_error",
            "Failed to fetch posts from Notion",
            exc,
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_exception_handler(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        logger.error("configuration_error", path=request.url.path, error=str(exc))
        return _error_response(
            request,
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "configuration_error",
            "Notion source is not configured",
            exc,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_server_error",
            "An unexpected error occurred",
            exc,
        )

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(health_router)
    app.include_router(pages_router)

    api_v1_router = APIRouter(prefix="/api/v1")
    api_v1_router.include_router(posts_api_router)
    app.include_router(api_v1_router)

    return app


app = create_app()
