"""
Configuration Management.

Configuration sources (in order of precedence):
1. Environment variables (NOTION_TOKEN, NOTION_DATABASE_ID, ...)
2. .env file
3. Default values

Example:
    from notion_blog.config import get_settings

    settings = get_settings()
    database_id = settings.notion_database_id
"""

from notion_blog.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
