"""
notion_blog Test Suite.

- unit/: Normalizer, raw schemas, HTTP client, collector, renderer and cache
- integration/: Collector over a mocked Notion API, and the FastAPI app
- conftest.py: Shared fixtures and test configuration

Run tests with: pytest
"""
