"""Notion collector extending BaseCollector.

Queries the blog database for published pages, fetches every page's blocks
concurrently and assembles the results into Post instances.
"""

import asyncio
from typing import Any, Optional

import structlog
from pydantic import ValidationError

from notion_blog.collectors.base import BaseCollector
from notion_blog.collectors.normalization.schema import Post
from notion_blog.collectors.notion.client import COLLECTOR, NotionClient
from notion_blog.collectors.notion.models import (
    NotionBlock,
    NotionPage,
    parse_block,
    parse_page,
)
from notion_blog.collectors.notion.normalizer import assemble_post
from notion_blog.config.settings import Settings, get_settings
from notion_blog.core.exceptions import CollectorError, CollectorTimeoutError

logger = structlog.get_logger(__name__)

PUBLISHED_FILTER = {
    "and": [
        {
            "property": "Published",
            "checkbox": {"equals": True},
        }
    ]
}

NEWEST_FIRST = [
    {
        "timestamp": "created_time",
        "direction": "descending",
    }
]


class NotionCollector(BaseCollector):
    """Collector for blog posts stored in a Notion database.

    Config options (from Settings):
        notion_database_id: Database to query
        notion_max_concurrency: Block fetches in flight at once
        notion_block_fetch_timeout_seconds: Timeout per page's block fetch
        block_fetch_policy: "strict" or "isolate"

    Example:
        async with NotionCollector() as collector:
            posts = await collector.fetch_all()
    """

    def __init__(
        self,
        client: Optional[NotionClient] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize Notion collector.

        Args:
            client: Notion client to use. Built from settings when omitted.
            settings: Settings to use instead of the cached global ones.
        """
        self._settings = settings or get_settings()
        self.client = client or NotionClient(settings=self._settings)
        self.database_id = self._settings.notion_database_id
        self.policy = self._settings.block_fetch_policy
        self._block_timeout = self._settings.notion_block_fetch_timeout_seconds
        self._max_concurrency = self._settings.notion_max_concurrency
        logger.info("NotionCollector initialized", policy=self.policy)

    async def __aenter__(self) -> "NotionCollector":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.client.aclose()

    async def fetch_all(self) -> list[Post]:
        """Fetch all published posts, newest first.

        Returns:
            One Post per page returned by the database query, in query order.

        Raises:
            CollectorError: If the database query fails, or, under the strict
                policy, if fetching any page's blocks fails.
        """
        logger.info("fetching_notion_posts", database_id=self.database_id)

        raw_pages = await self.client.query_database(
            self.database_id,
            filter=PUBLISHED_FILTER,
            sorts=NEWEST_FIRST,
        )
        pages = self._validate_pages(raw_pages)

        if not pages:
            logger.info("notion_posts_fetched", count=0)
            return []

        block_lists = await self._fetch_all_blocks(pages)

        posts = [assemble_post(page, blocks) for page, blocks in zip(pages, block_lists)]
        logger.info("notion_posts_fetched", count=len(posts))
        return posts

    async def _fetch_all_blocks(self, pages: list[NotionPage]) -> list[list[NotionBlock]]:
        """Fetch every page's blocks concurrently, keeping page order."""
        semaphore = asyncio.Semaphore(self._max_concurrency)
        fetch = self._fetch_blocks if self.policy == "strict" else self._fetch_blocks_isolated

        # All tasks are scheduled before the first await
        tasks = [asyncio.create_task(fetch(page.id, semaphore)) for page in pages]
        try:
            return list(await asyncio.gather(*tasks))
        except Exception:
            for task in tasks:
                task.cancel()
            # Nothing may still be running once the error reaches the caller
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _fetch_blocks(
        self, page_id: str, semaphore: asyncio.Semaphore
    ) -> list[NotionBlock]:
        async with semaphore:
            try:
                raw_blocks = await asyncio.wait_for(
                    self.client.list_block_children(page_id),
                    timeout=self._block_timeout,
                )
            except asyncio.TimeoutError:
                raise CollectorTimeoutError(
                    COLLECTOR,
                    f"Fetching blocks timed out after {self._block_timeout}s",
                    {"page_id": page_id},
                )
        return self._validate_blocks(page_id, raw_blocks)

    async def _fetch_blocks_isolated(
        self, page_id: str, semaphore: asyncio.Semaphore
    ) -> list[NotionBlock]:
        try:
            return await self._fetch_blocks(page_id, semaphore)
        except CollectorError as e:
            logger.warning(
                "notion_block_fetch_failed",
                page_id=page_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return []

    def _validate_pages(self, raw_pages: list[Any]) -> list[NotionPage]:
        pages = []
        for raw in raw_pages:
            try:
                pages.append(parse_page(raw))
            except ValidationError as e:
                logger.warning(
                    "notion_page_invalid",
                    page_id=raw.get("id") if isinstance(raw, dict) else None,
                    error=str(e),
                )
        return pages

    def _validate_blocks(self, page_id: str, raw_blocks: list[Any]) -> list[NotionBlock]:
        blocks = []
        for raw in raw_blocks:
            try:
                blocks.append(parse_block(raw))
            except ValidationError as e:
                logger.warning(
                    "notion_block_invalid",
                    page_id=page_id,
                    block_id=raw.get("id") if isinstance(raw, dict) else None,
                    error=str(e),
                )
        return blocks

    async def health_check(self) -> bool:
        """Check if the collector is operational.

        Returns:
            True if a database to query is configured
        """
        return bool(self.database_id)
