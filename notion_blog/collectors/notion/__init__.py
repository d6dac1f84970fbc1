"""Notion data collector module.

Provides NotionClient for the REST API, NotionCollector extending
BaseCollector, and the block/page normalizer functions.
"""

from notion_blog.collectors.notion.client import NotionClient
from notion_blog.collectors.notion.collector import NotionCollector
from notion_blog.collectors.notion.normalizer import assemble_post, map_block

__all__ = [
    "NotionClient",
    "NotionCollector",
    "assemble_post",
    "map_block",
]
