"""
Exception hierarchy for the Notion blog pipeline.

Remote failures are categorized as retryable or permanent so the HTTP client
knows which ones to retry. Malformed or unrecognized records coming back from
Notion are never raised; the normalizer drops or blanks them instead.
"""

from typing import Any, Optional


# =============================================================================
# Base Exceptions
# =============================================================================


class NotionBlogError(Exception):
    """Base exception for all notion_blog errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class RetryableError(NotionBlogError):
    """
    Transient errors that should be retried.

    Examples: Rate limits, timeouts, temporary network issues.
    """

    pass


class PermanentError(NotionBlogError):
    """
    Errors that won't be fixed by retrying.

    Examples: Invalid token, unknown database, unshared page.
    """

    pass


# =============================================================================
# Collector Errors
# =============================================================================


class CollectorError(NotionBlogError):
    """Base exception for remote collection failures."""

    def __init__(
        self,
        collector_type: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        self.collector_type = collector_type
        super().__init__(f"[{collector_type}] {message}", details)


class CollectorRateLimitError(CollectorError, RetryableError):
    """Raised when the remote API answers 429."""

    pass


class CollectorTimeoutError(CollectorError, RetryableError):
    """Raised when a remote call or a block fetch times out."""

    pass


class CollectorAuthError(CollectorError, PermanentError):
    """Raised when the integration token is rejected."""

    pass


class CollectorNotFoundError(CollectorError, PermanentError):
    """Raised when the database or block is missing or not shared."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PermanentError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details)
