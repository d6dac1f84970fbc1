"""
notion_blog - Main Entry Point

Serves the blog rendered from the Notion database.
"""

import uvicorn
import structlog

from notion_blog.config import get_settings
from notion_blog.core.log_config import configure_logging

logger = structlog.get_logger(__name__)


def main():
    """Main entry point for running the application."""
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=not settings.is_development)

    logger.info(
        "Starting server",
        host=settings.api_host,
        port=settings.api_port,
    )

    uvicorn.run(
        "notion_blog.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
