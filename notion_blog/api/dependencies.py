"""FastAPI dependency injection providers.

Holds the process-wide collector, renderer and post cache.
"""

import asyncio
import time
from typing import Awaitable, Callable, Optional

import structlog

from notion_blog.collectors.base import BaseCollector
from notion_blog.collectors.normalization.schema import Post
from notion_blog.collectors.notion.collector import NotionCollector
from notion_blog.config.settings import get_settings
from notion_blog.delivery.renderer import PostRenderer

logger = structlog.get_logger(__name__)


class PostCache:
    """
    Reuses the last fetched post list for a short time.

    Every refresh recomputes the full list from Notion; entries are never
    patched in place.
    """

    def __init__(self, ttl_seconds: int = 60):
        """Initialize cache with TTL in seconds (0 disables caching)."""
        self._ttl = ttl_seconds
        self._posts: Optional[list[Post]] = None
        self._fetched_at: float = 0.0
        self._lock = asyncio.Lock()

    def _is_fresh(self) -> bool:
        return (
            self._posts is not None
            and self._ttl > 0
            and time.monotonic() - self._fetched_at < self._ttl
        )

    async def get(self, fetch: Callable[[], Awaitable[list[Post]]]) -> list[Post]:
        """Return cached posts, calling fetch when the cache is stale."""
        if self._is_fresh():
            return self._posts

        async with self._lock:
            # Another request may have refreshed while we waited
            if self._is_fresh():
                return self._posts

            posts = await fetch()
            self._posts = posts
            self._fetched_at = time.monotonic()
            logger.debug("post_cache_refreshed", count=len(posts))
            return posts

    def invalidate(self) -> None:
        """Drop the cached posts."""
        self._posts = None
        self._fetched_at = 0.0


# Global instances for singleton pattern
_collector: Optional[BaseCollector] = None
_renderer: Optional[PostRenderer] = None
_post_cache: Optional[PostCache] = None


def get_collector() -> BaseCollector:
    """
    Get the collector instance.

    Created on first use so the app can start without a Notion token.

    Raises:
        ConfigurationError: If no Notion token is configured.
    """
    global _collector

    if _collector is None:
        _collector = NotionCollector()

    return _collector


def set_collector(collector: BaseCollector) -> None:
    """Replace the collector (used on startup and in tests)."""
    global _collector
    _collector = collector


def get_renderer() -> PostRenderer:
    """Get the shared PostRenderer."""
    global _renderer

    if _renderer is None:
        _renderer = PostRenderer()

    return _renderer


def get_post_cache() -> PostCache:
    """Get the shared PostCache."""
    global _post_cache

    if _post_cache is None:
        _post_cache = PostCache(ttl_seconds=get_settings().posts_cache_ttl_seconds)

    return _post_cache


async def get_posts() -> list[Post]:
    """Fetch published posts through the cache."""
    collector = get_collector()
    return await get_post_cache().get(collector.fetch_all)


async def reset_dependencies() -> None:
    """
    Reset all global dependency instances.

    Closes the collector's HTTP client if one was created.
    """
    global _collector, _renderer, _post_cache

    if isinstance(_collector, NotionCollector):
        await _collector.client.aclose()

    _collector = None
    _renderer = None
    _post_cache = None
