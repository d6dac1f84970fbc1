"""Normalized post model shared by the collector and the presentation layer."""

from notion_blog.collectors.normalization.schema import (
    CodeContent,
    Content,
    ContentKind,
    Post,
    TextContent,
)

__all__ = [
    "CodeContent",
    "Content",
    "ContentKind",
    "Post",
    "TextContent",
]
