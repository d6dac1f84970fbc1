"""
Core infrastructure for notion_blog.

- exceptions: Error hierarchy shared by the client, collector and API
- log_config: structlog setup used by the server and the build script
"""

from notion_blog.core.exceptions import (
    NotionBlogError,
    RetryableError,
    PermanentError,
    CollectorError,
    CollectorRateLimitError,
    CollectorTimeoutError,
    CollectorAuthError,
    CollectorNotFoundError,
    ConfigurationError,
)
from notion_blog.core.log_config import configure_logging

__all__ = [
    # Exceptions
    "NotionBlogError",
    "RetryableError",
    "PermanentError",
    "CollectorError",
    "CollectorRateLimitError",
    "CollectorTimeoutError",
    "CollectorAuthError",
    "CollectorNotFoundError",
    "ConfigurationError",
    # Logging
    "configure_logging",
]
