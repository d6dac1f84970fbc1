"""Unit tests for the API's post cache."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from notion_blog.api.dependencies import PostCache
from notion_blog.collectors.normalization.schema import Post


class TestPostCache:
    @pytest.mark.asyncio
    async def test_reuses_fresh_result(self):
        fetch = AsyncMock(return_value=[Post(id="a")])
        cache = PostCache(ttl_seconds=60)

        first = await cache.get(fetch)
        second = await cache.get(fetch)

        assert first == second == [Post(id="a")]
        fetch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_zero_ttl_always_fetches(self):
        fetch = AsyncMock(return_value=[])
        cache = PostCache(ttl_seconds=0)

        await cache.get(fetch)
        await cache.get(fetch)

        assert fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_invalidate(self):
        fetch = AsyncMock(return_value=[])
        cache = PostCache(ttl_seconds=60)

        await cache.get(fetch)
        cache.invalidate()
        await cache.get(fetch)

        assert fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_concurrent_misses_fetch_once(self):
        calls = 0

        async def fetch():
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.01)
            return [Post(id="a")]

        cache = PostCache(ttl_seconds=60)
        results = await asyncio.gather(*[cache.get(fetch) for _ in range(5)])

        assert calls == 1
        assert all(r == [Post(id="a")] for r in results)

    @pytest.mark.asyncio
    async def test_failed_fetch_not_cached(self):
        fetch = AsyncMock(side_effect=[RuntimeError("down"), [Post(id="a")]])
        cache = PostCache(ttl_seconds=60)

        with pytest.raises(RuntimeError):
            await cache.get(fetch)

        assert await cache.get(fetch) == [Post(id="a")]
