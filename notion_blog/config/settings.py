"""
Application Settings.

Centralized configuration using Pydantic Settings with environment variable loading.

The Notion token and database ID are the only external parameters the
pipeline needs. Both are optional here so that importing the package, or
running the normalizer in tests, never depends on the environment; the
Notion client checks for the token when it is constructed.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Notion
    # -------------------------------------------------------------------------
    notion_token: SecretStr | None = Field(
        default=None, description="Notion internal integration token"
    )
    notion_database_id: str = Field(
        default="",
        description="ID of the database holding the blog posts",
    )
    notion_api_base: str = Field(
        default="https://api.notion.com/v1",
        description="Notion REST API base URL",
    )
    notion_version: str = Field(
        default="2022-06-28",
        description="Value sent in the Notion-Version header",
    )
    notion_timeout_seconds: float = Field(
        default=30.0,
        description="HTTP timeout for a single Notion request",
    )
    notion_max_retries: int = Field(
        default=3,
        ge=1,
        description="Attempts for rate-limited or timed-out requests",
    )
    notion_requests_per_second: int = Field(
        default=3,
        ge=1,
        description="Client-side request rate cap (Notion averages 3 rps)",
    )

    # -------------------------------------------------------------------------
    # Collection pipeline
    # -------------------------------------------------------------------------
    notion_max_concurrency: int = Field(
        default=8,
        ge=1,
        description="Maximum block-list requests in flight at once",
    )
    notion_block_fetch_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout for fetching the blocks of one post, retries included",
    )
    block_fetch_policy: Literal["strict", "isolate"] = Field(
        default="strict",
        description=(
            "strict: one failed block fetch fails the whole run. "
            "isolate: the failed post is rendered without contents."
        ),
    )
    posts_cache_ttl_seconds: int = Field(
        default=60,
        ge=0,
        description="How long the web server reuses fetched posts (0 disables)",
    )

    # -------------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------------
    site_title: str = Field(default="Blog", description="Title shown on the index page")
    site_language: str = Field(default="ja", description="HTML lang attribute")
    display_timezone: str = Field(
        default="Asia/Tokyo",
        description="IANA zone used when formatting post timestamps",
    )
    timestamp_format: str = Field(
        default="%Y.%m.%d %H:%M",
        description="strftime format for post timestamps",
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    api_host: str = Field(default="0.0.0.0", description="Bind host for the web server")
    api_port: int = Field(default=8000, description="Bind port for the web server")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings if needed.
    """
    return Settings()
