"""Blocking pxshot client.

Same operations as :class:`pxshot.Pxshot`, but every call blocks the calling
thread for the whole exchange.
"""

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


class BlockingPxshot:
    """Synchronous client for the pxshot screenshot API.

    Usage with context manager (recommended):
        with BlockingPxshot("px_your_api_key") as client:
            response = client.screenshot(
                ScreenshotRequest.builder().url("https://example.com").build()
            )
            response.save("screenshot.png")
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
        http_client: httpx.Client | None = None,
    ):
        self.config = ClientConfig(
            api_key=api_key,
            base_url=base_url,
            timeout_seconds=timeout,
            user_agent=user_agent,
        )
        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.Client(
                timeout=self.config.timeout_seconds,
                transport=transport,
            )
        self._client = http_client

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: httpx.BaseTransport | None = None,
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
        return cls.from_config(load_config())

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def screenshot(self, request: ScreenshotRequest) -> ScreenshotResponse:
        """Capture a screenshot (blocking).

        Returns a BYTES response unless ``request.store`` is True.
        """
        store = request.wants_stored
        response = self._send("POST", SCREENSHOT_PATH, json=request.to_payload())
        return decode_screenshot(response, store)

    def capture(self, request: ScreenshotRequest) -> ScreenshotResponse:
        return self.screenshot(request)

    def usage(self) -> Usage:
        """Get API usage statistics (blocking)."""
        return decode_usage(self._send("GET", USAGE_PATH))

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = self.config.endpoint(path)
        logger.debug(f"{method} {url}")
        try:
            response = self._client.request(
                method,
                url,
                headers=self.config.headers,
                **kwargs,
            )
        except httpx.HTTPError as e:
            raise RequestError(e) from e
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    def close(self) -> None:
        """Close the underlying HTTP client if we created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Self:
        """Context manager entry."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Context manager exit."""
        self.close()
