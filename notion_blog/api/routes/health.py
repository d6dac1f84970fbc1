"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from notion_blog import __version__
from notion_blog.api.models import HealthCheckResponse
from notion_blog.config.settings import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health() -> HealthCheckResponse:
    """Report whether the Notion source is configured.

    Does not call Notion; a misconfigured token only shows up on the first
    page view.
    """
    settings = get_settings()
    configured = settings.notion_token is not None and bool(settings.notion_database_id)
    return HealthCheckResponse(
        status="healthy" if configured else "degraded",
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        notion_configured=configured,
        block_fetch_policy=settings.block_fetch_policy,
    )
