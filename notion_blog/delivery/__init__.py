"""HTML rendering of normalized posts."""

from notion_blog.delivery.renderer import PostRenderer, format_timestamp, write_site

__all__ = [
    "PostRenderer",
    "format_timestamp",
    "write_site",
]
