"""
pxshot - Client library for the pxshot screenshot API

Usage:
    # Async usage
    from pxshot import Pxshot, ScreenshotRequest

    async with Pxshot("px_your_api_key") as client:
        response = await client.screenshot(
            ScreenshotRequest.builder().url("https://example.com").build()
        )
        response.save("screenshot.png")

    # Blocking usage
    from pxshot import BlockingPxshot

    with BlockingPxshot("px_your_api_key") as client:
        usage = client.usage()

    # Store on the server and get a URL back
    request = ScreenshotRequest.builder().url("https://example.com").store().build()
    stored = (await client.screenshot(request)).as_stored()
"""

__version__ = "0.1.0"

from .blocking import BlockingPxshot
from .client import Pxshot
from .config import ClientConfig, load_config
from .errors import (
    ApiError,
    ConfigError,
    MissingFieldError,
    ParseError,
    PxshotError,
    RequestError,
)
from .types import (
    ImageFormat,
    ResponseKind,
    ScreenshotRequest,
    ScreenshotRequestBuilder,
    ScreenshotResponse,
    StoredScreenshot,
    Usage,
    WaitUntil,
)

__all__ = [
    "ApiError",
    "BlockingPxshot",
    "ClientConfig",
    "ConfigError",
    "ImageFormat",
    "MissingFieldError",
    "ParseError",
    "Pxshot",
    "PxshotError",
    "RequestError",
    "ResponseKind",
    "ScreenshotRequest",
    "ScreenshotRequestBuilder",
    "ScreenshotResponse",
    "StoredScreenshot",
    "Usage",
    "WaitUntil",
    "load_config",
]
