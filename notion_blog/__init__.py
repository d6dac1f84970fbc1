"""
notion_blog - a blog rendered from a Notion database.

- collectors: Notion client, concurrent collector and block normalizer
- delivery: HTML rendering of normalized posts
- api: FastAPI application serving the rendered blog
- config: Pydantic settings
- core: Exceptions and logging setup
"""

__version__ = "0.1.0"
