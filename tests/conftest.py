"""
Pytest Configuration and Shared Fixtures.

This module provides common fixtures for all tests:

- notion_settings: Settings with a fake token and no .env lookup
- sample_page / sample_blocks: The "Hello" post as Notion returns it
- make_client: NotionClient backed by an httpx.MockTransport handler
"""

from typing import Callable

import httpx
import pytest

from notion_blog.collectors.notion.client import NotionClient
from notion_blog.config.settings import Settings


def build_settings(**overrides) -> Settings:
    """Settings for tests, ignoring the developer's .env file."""
    values = {
        "notion_token": "secret_test_token",
        "notion_database_id": "db123",
        "notion_requests_per_second": 1000,
        "notion_max_retries": 3,
        "posts_cache_ttl_seconds": 0,
        "display_timezone": "UTC",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def notion_settings() -> Settings:
    """Return settings pointing at a fake database."""
    return build_settings()


@pytest.fixture
def sample_page() -> dict:
    """Return a published page as the database query returns it."""
    return {
        "object": "page",
        "id": "p1",
        "created_time": "2023-01-01T00:00:00Z",
        "last_edited_time": "2023-01-02T00:00:00Z",
        "properties": {
            "Name": {
                "id": "title",
                "type": "title",
                "title": [{"type": "text", "plain_text": "Hello"}],
            },
            "Slug": {
                "id": "abcd",
                "type": "rich_text",
                "rich_text": [{"type": "text", "plain_text": "hello"}],
            },
            "Published": {"id": "efgh", "type": "checkbox", "checkbox": True},
        },
    }


@pytest.fixture
def sample_blocks() -> list[dict]:
    """Return the child blocks of the sample page."""
    return [
        {
            "object": "block",
            "id": "b1",
            "type": "heading_2",
            "heading_2": {"rich_text": [{"plain_text": "Intro"}]},
        },
        {
            "object": "block",
            "id": "b2",
            "type": "paragraph",
            "paragraph": {"rich_text": []},
        },
    ]


@pytest.fixture
def make_client(notion_settings) -> Callable[[Callable[[httpx.Request], httpx.Response]], NotionClient]:
    """Return a factory building a NotionClient around a request handler."""

    def factory(handler, settings: Settings | None = None) -> NotionClient:
        return NotionClient(
            settings=settings or notion_settings,
            transport=httpx.MockTransport(handler),
            retry_wait=0,
        )

    return factory
