"""
Data Source Integrations.

- notion: Notion database client, collector and normalizer
- normalization: The Post/Content model every collector produces

Example:
    from notion_blog.collectors import NotionCollector

    async with NotionCollector() as collector:
        posts = await collector.fetch_all()
"""

from notion_blog.collectors.base import BaseCollector
from notion_blog.collectors.notion import NotionClient, NotionCollector

__all__ = [
    "BaseCollector",
    "NotionClient",
    "NotionCollector",
]
