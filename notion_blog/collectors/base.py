"""Base collector interface.

Collectors own a remote client and turn what it returns into normalized
Post instances.
"""

from abc import ABC, abstractmethod

from notion_blog.collectors.normalization.schema import Post


class BaseCollector(ABC):
    """Abstract base class for post collectors."""

    @abstractmethod
    async def fetch_all(self) -> list[Post]:
        """Fetch and normalize every published post, newest first."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the collector is operational.

        Returns:
            True if the collector can connect and operate successfully.
        """
        ...

    async def get_post(self, slug: str) -> Post | None:
        """Return the published post with the given slug, if any."""
        for post in await self.fetch_all():
            if post.slug == slug:
                return post
        return None
