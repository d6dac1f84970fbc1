"""Async client for the Notion REST API.

Covers the two endpoints the blog needs: querying a database and listing a
block's children. Only the first page of results is returned for either;
the blog neither paginates nor descends into nested children.

API Reference: https://developers.notion.com/reference/intro
"""

import asyncio
from typing import Any, Optional

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from notion_blog.config.settings import Settings, get_settings
from notion_blog.core.exceptions import (
    CollectorAuthError,
    CollectorError,
    CollectorNotFoundError,
    CollectorRateLimitError,
    CollectorTimeoutError,
    ConfigurationError,
    RetryableError,
)

logger = structlog.get_logger(__name__)

COLLECTOR = "notion"

# Largest page size the children endpoint accepts
BLOCK_PAGE_SIZE = 100


class NotionClient:
    """Async wrapper around the Notion API with throttling and retries.

    Example:
        async with NotionClient() as client:
            pages = await client.query_database(database_id, filter=..., sorts=...)
            blocks = await client.list_block_children(pages[0]["id"])
    """

    def __init__(
        self,
        token: Optional[str] = None,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        retry_wait: float = 1.0,
    ):
        """Initialize the client.

        Args:
            token: Integration token. If not provided, loads from settings.
            settings: Settings to use instead of the cached global ones.
            transport: Custom httpx transport (used by tests).
            retry_wait: Multiplier for the exponential backoff between retries.

        Raises:
            ConfigurationError: If no token is configured.
        """
        self._settings = settings or get_settings()
        self._token = token or (
            self._settings.notion_token.get_secret_value()
            if self._settings.notion_token
            else None
        )
        if not self._token:
            raise ConfigurationError(
                "Notion token not configured. Set NOTION_TOKEN or pass token.",
                config_key="notion_token",
            )

        self._base_url = self._settings.notion_api_base.rstrip("/")
        self._timeout = self._settings.notion_timeout_seconds
        self._max_retries = self._settings.notion_max_retries
        self._retry_wait = retry_wait
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        # Rate limiting: track requests in the last second
        self._request_times: list[float] = []
        self._max_requests_per_second = self._settings.notion_requests_per_second
        self._rate_lock = asyncio.Lock()

    async def __aenter__(self) -> "NotionClient":
        """Enter async context manager."""
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self._token}",
                    "Notion-Version": self._settings.notion_version,
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def _rate_limit(self) -> None:
        """Keep outgoing requests under the configured per-second cap."""
        async with self._rate_lock:
            loop = asyncio.get_running_loop()
            now = loop.time()

            # Remove timestamps older than 1 second
            self._request_times = [t for t in self._request_times if now - t < 1.0]

            if len(self._request_times) >= self._max_requests_per_second:
                wait_time = 1.0 - (now - self._request_times[0])
                if wait_time > 0:
                    await asyncio.sleep(wait_time)
                now = loop.time()

            self._request_times.append(now)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_data: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> dict[str, Any]:
        """Make an API request, retrying transient (RetryableError) failures.

        Raises:
            CollectorRateLimitError: When still rate limited after all attempts.
            CollectorTimeoutError: When still timing out after all attempts.
            CollectorAuthError: On 401/403.
            CollectorNotFoundError: On 404.
            CollectorError: On other API or transport errors.
        """
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(RetryableError),
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=self._retry_wait, max=10),
            before_sleep=lambda retry_state: logger.warning(
                "notion_request_retry",
                path=path,
                attempt=retry_state.attempt_number,
                error=str(retry_state.outcome.exception()),
            ),
            reraise=True,
        ):
            with attempt:
                return await self._send(method, path, json_data=json_data, params=params)

        raise AssertionError("unreachable")  # pragma: no cover

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json_data: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> dict[str, Any]:
        await self._rate_limit()
        client = await self._ensure_client()

        try:
            response = await client.request(method, path, json=json_data, params=params)
        except httpx.TimeoutException as e:
            logger.error("notion_timeout", path=path, error=str(e))
            raise CollectorTimeoutError(
                COLLECTOR,
                f"Request timeout: {e}",
                {"path": path},
            )
        except httpx.RequestError as e:
            logger.error("notion_request_error", path=path, error=str(e))
            raise CollectorError(
                COLLECTOR,
                f"Request failed: {e}",
                {"path": path, "original_error": str(e)},
            )

        if response.status_code == 429:
            logger.warning(
                "notion_rate_limited",
                path=path,
                retry_after=response.headers.get("Retry-After"),
            )
            raise CollectorRateLimitError(
                COLLECTOR,
                "Rate limited by Notion API",
                {"path": path},
            )
        elif response.status_code in (401, 403):
            raise CollectorAuthError(
                COLLECTOR,
                "Token rejected or integration lacks access",
                {"path": path, "status_code": response.status_code},
            )
        elif response.status_code == 404:
            raise CollectorNotFoundError(
                COLLECTOR,
                f"Resource not found or not shared with the integration: {path}",
                {"path": path},
            )
        elif response.status_code >= 400:
            error_data = _safe_json(response)
            error_msg = error_data.get("message", "Unknown error")
            logger.error(
                "notion_api_error",
                status_code=response.status_code,
                code=error_data.get("code"),
                error=error_msg,
                path=path,
            )
            raise CollectorError(
                COLLECTOR,
                f"API error {response.status_code}: {error_msg}",
                {"path": path, "status_code": response.status_code},
            )

        return _safe_json(response)

    # -------------------------------------------------------------------------
    # Public API Methods
    # -------------------------------------------------------------------------

    async def query_database(
        self,
        database_id: str,
        *,
        filter: Optional[dict] = None,
        sorts: Optional[list[dict]] = None,
    ) -> list[dict[str, Any]]:
        """Query a database and return the first page of results.

        Args:
            database_id: Notion database ID. An empty ID is sent as-is.
            filter: Notion filter object.
            sorts: Notion sort objects.

        Returns:
            Raw page dictionaries in the order Notion returned them.
        """
        body: dict[str, Any] = {}
        if filter:
            body["filter"] = filter
        if sorts:
            body["sorts"] = sorts

        logger.info("querying_notion_database", database_id=database_id)
        response = await self._request("POST", f"/databases/{database_id}/query", json_data=body)
        return response.get("results", [])

    async def list_block_children(self, block_id: str) -> list[dict[str, Any]]:
        """List the direct children of a block or page.

        Args:
            block_id: Page or block ID.

        Returns:
            Raw block dictionaries in document order.
        """
        logger.debug("listing_notion_blocks", block_id=block_id)
        response = await self._request(
            "GET",
            f"/blocks/{block_id}/children",
            params={"page_size": BLOCK_PAGE_SIZE},
        )
        return response.get("results", [])


def _safe_json(response: httpx.Response) -> dict[str, Any]:
    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
