"""Async pxshot client built on httpx."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Self

import httpx

from ._http import SCREENSHOT_PATH, USAGE_PATH, decode_screenshot, decode_usage
from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SEC,
    DEFAULT_USER_AGENT,
    ClientConfig,
    load_config,
)
from .errors import RequestError
from .types import ScreenshotRequest, ScreenshotResponse, Usage

logger = logging.getLogger(__name__)


class Pxshot:
    """Async client for the pxshot screenshot API.

    Each call performs exactly one HTTP exchange; there are no retries.

    Usage:
        async with Pxshot("px_your_api_key") as client:
            response = await client.screenshot(
                ScreenshotRequest.builder().url("https://example.com").build()
            )
            response.save("screenshot.png")

    Or manually:
        client = Pxshot("px_your_api_key")
        try:
            usage = await client.usage()
        finally:
            await client.aclose()
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            api_key: pxshot API key
            base_url: API root, for testing or self-hosted deployments
            timeout: Transport timeout in seconds
            user_agent: User-Agent header value
            transport: Custom httpx transport (e.g. ``httpx.MockTransport``)
            http_client: Existing httpx client to reuse; it is not closed by us

        Raises:
            ConfigError: If the API key or base URL is unusable
        """
        self.config = ClientConfig(
            api_key=api_key,
            base_url=base_url,
            timeout_seconds=timeout,
            user_agent=user_agent,
        )
        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                transport=transport,
            )
        self._client = http_client

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Self:
        return cls(
            config.api_key,
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            user_agent=config.user_agent,
            transport=transport,
        )

    @classmethod
    def from_env(cls) -> Self:
        """Create a client from PXSHOT_API_KEY / PXSHOT_BASE_URL / PXSHOT_TIMEOUT."""
        return cls.from_config(load_config())

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def screenshot(self, request: ScreenshotRequest) -> ScreenshotResponse:
        """Capture a screenshot.

        Args:
            request: A built ScreenshotRequest

        Returns:
            A BYTES response when ``request.store`` is unset or False,
            a STORED response when it is True

        Raises:
            RequestError: If the exchange could not be completed
            ApiError: If the API answered with a non-2xx status
            ParseError: If a stored descriptor could not be decoded
        """
        store = request.wants_stored
        response = await self._send(
            "POST",
            SCREENSHOT_PATH,
            json=request.to_payload(),
        )
        return decode_screenshot(response, store)

    async def capture(self, request: ScreenshotRequest) -> ScreenshotResponse:
        """Alias of :meth:`screenshot`."""
        return await self.screenshot(request)

    async def usage(self) -> Usage:
        """Get API usage for the current billing period.

        Raises:
            RequestError: If the exchange could not be completed
            ApiError: If the API answered with a non-2xx status
            ParseError: If the usage body could not be decoded
        """
        response = await self._send("GET", USAGE_PATH)
        return decode_usage(response)

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = self.config.endpoint(path)
        logger.debug(f"{method} {url}")
        try:
            response = await self._client.request(
                method,
                url,
                headers=self.config.headers,
                **kwargs,
            )
        except httpx.HTTPError as e:
            raise RequestError(e) from e
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    async def aclose(self) -> None:
        """Close the underlying HTTP client if we created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit."""
        await self.aclose()
