"""Request and response types for the pxshot API."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

from .errors import MissingFieldError


class ImageFormat(str, Enum):
    """Image format of the captured screenshot. The server defaults to PNG."""

    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"


class WaitUntil(str, Enum):
    """Page-load milestone the server waits for before capturing.

    The server defaults to NETWORK_IDLE (no network connections for 500ms).
    """

    LOAD = "load"
    DOM_CONTENT_LOADED = "dom_content_loaded"
    NETWORK_IDLE = "network_idle"


class ScreenshotRequest(BaseModel):
    """Request to capture a screenshot.

    Instances are immutable. Build them with :meth:`builder`:

        request = (
            ScreenshotRequest.builder()
            .url("https://example.com")
            .format(ImageFormat.JPEG)
            .quality(85)
            .build()
        )

    Every field except ``url`` is optional and left out of the request body
    when unset, so the server applies its own defaults.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(min_length=1, description="URL to capture")
    format: ImageFormat | None = Field(default=None, description="Image format")
    quality: int | None = Field(default=None, description="Image quality (1-100, JPEG/WebP only)")
    width: int | None = Field(default=None, description="Viewport width in pixels")
    height: int | None = Field(default=None, description="Viewport height in pixels")
    full_page: bool | None = Field(default=None, description="Capture the full scrollable page")
    wait_until: WaitUntil | None = Field(default=None, description="When navigation counts as done")
    wait_for_selector: str | None = Field(default=None, description="CSS selector to await")
    wait_for_timeout: int | None = Field(default=None, description="Extra wait after load (ms)")
    device_scale_factor: float | None = Field(default=None, description="Device scale factor (1-3)")
    store: bool | None = Field(default=None, description="Store and return a URL instead of bytes")
    block_ads: bool | None = Field(default=None, description="Block ads and trackers")

    @classmethod
    def builder(cls) -> ScreenshotRequestBuilder:
        """Create a new builder for a screenshot request."""
        return ScreenshotRequestBuilder()

    @property
    def wants_stored(self) -> bool:
        """Whether the server will answer with a stored descriptor (absent store = False)."""
        return bool(self.store)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body, omitting every unset optional field."""
        return self.model_dump(mode="json", exclude_none=True)


class ScreenshotRequestBuilder:
    """Builder for :class:`ScreenshotRequest`.

    Setters only record values; ``build()`` is the single validation point.
    """

    def __init__(self) -> None:
        self._fields: dict[str, Any] = {}

    def _set(self, name: str, value: Any) -> Self:
        self._fields[name] = value
        return self

    def url(self, url: str) -> Self:
        """Set the URL to capture."""
        return self._set("url", url)

    def format(self, format: ImageFormat | str) -> Self:
        """Set the image format."""
        return self._set("format", ImageFormat(format))

    def quality(self, quality: int) -> Self:
        """Set the image quality (1-100, only for JPEG/WebP)."""
        return self._set("quality", quality)

    def width(self, width: int) -> Self:
        """Set the viewport width in pixels."""
        return self._set("width", width)

    def height(self, height: int) -> Self:
        """Set the viewport height in pixels."""
        return self._set("height", height)

    def full_page(self, full_page: bool = True) -> Self:
        """Capture the full scrollable page."""
        return self._set("full_page", full_page)

    def wait_until(self, wait_until: WaitUntil | str) -> Self:
        """Set when to consider navigation succeeded."""
        return self._set("wait_until", WaitUntil(wait_until))

    def wait_for_selector(self, selector: str) -> Self:
        """Wait for a CSS selector before capturing."""
        return self._set("wait_for_selector", selector)

    def wait_for_timeout(self, timeout_ms: int) -> Self:
        """Additional wait time in milliseconds after page load."""
        return self._set("wait_for_timeout", timeout_ms)

    def device_scale_factor(self, factor: float) -> Self:
        """Set the device scale factor (1-3)."""
        return self._set("device_scale_factor", factor)

    def store(self, store: bool = True) -> Self:
        """Store the screenshot and return a URL instead of bytes."""
        return self._set("store", store)

    def block_ads(self, block_ads: bool = True) -> Self:
        """Block ads and trackers."""
        return self._set("block_ads", block_ads)

    def build(self) -> ScreenshotRequest:
        """Build the request.

        Raises:
            MissingFieldError: If the URL was never set (or set to "")
        """
        if not self._fields.get("url"):
            raise MissingFieldError("url")
        return ScreenshotRequest.model_construct(**self._fields)


class StoredScreenshot(BaseModel):
    """Descriptor of a server-stored screenshot (store=True)."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(description="Where the screenshot is stored")
    expires_at: datetime = Field(description="When the stored screenshot expires")
    width: int = Field(ge=0, description="Width in pixels")
    height: int = Field(ge=0, description="Height in pixels")
    size_bytes: int = Field(ge=0, description="Size in bytes")

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the stored copy has passed its expiry."""
        if now is None:
            now = datetime.now(timezone.utc)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return now >= expires_at


class Usage(BaseModel):
    """API usage for the current billing period."""

    model_config = ConfigDict(frozen=True)

    screenshots: int = Field(ge=0, description="Screenshots taken this period")
    bytes: int = Field(ge=0, description="Total screenshot bytes this period")
    period_start: datetime
    period_end: datetime


class ApiErrorBody(BaseModel):
    """Error body sent by the API on non-2xx responses."""

    error: str


class ResponseKind(str, Enum):
    """Which shape a screenshot response has."""

    BYTES = "bytes"
    STORED = "stored"


@dataclass(slots=True, frozen=True)
class ScreenshotResponse:
    """Result of a capture: raw image bytes or a stored-screenshot descriptor.

    Exactly one of ``data`` / ``stored`` is set, matching ``kind``. Consume it
    with a ``match`` on ``kind`` or through the accessors, which return None
    for the other variant instead of raising.

    Attributes:
        kind: Which variant this is
        data: Raw image bytes (BYTES only)
        stored: Stored screenshot info (STORED only)
    """

    kind: ResponseKind
    data: bytes | None = None
    stored: StoredScreenshot | None = None

    def __post_init__(self) -> None:
        match self.kind:
            case ResponseKind.BYTES:
                if self.data is None or self.stored is not None:
                    raise ValueError("BYTES response must carry data and no stored info")
            case ResponseKind.STORED:
                if self.stored is None or self.data is not None:
                    raise ValueError("STORED response must carry stored info and no data")

    @classmethod
    def from_bytes(cls, data: bytes) -> ScreenshotResponse:
        return cls(kind=ResponseKind.BYTES, data=data)

    @classmethod
    def from_stored(cls, stored: StoredScreenshot) -> ScreenshotResponse:
        return cls(kind=ResponseKind.STORED, stored=stored)

    @property
    def is_stored(self) -> bool:
        return self.kind is ResponseKind.STORED

    def as_bytes(self) -> bytes | None:
        """Get the image bytes if this is a bytes response."""
        match self.kind:
            case ResponseKind.BYTES:
                return self.data
            case ResponseKind.STORED:
                return None

    def as_stored(self) -> StoredScreenshot | None:
        """Get the stored screenshot info if this is a stored response."""
        match self.kind:
            case ResponseKind.BYTES:
                return None
            case ResponseKind.STORED:
                return self.stored

    def into_bytes(self) -> bytes | None:
        """Take the image bytes out of the response, None if stored."""
        return self.as_bytes()

    def into_stored(self) -> StoredScreenshot | None:
        """Take the stored info out of the response, None if bytes."""
        return self.as_stored()

    def save(self, filepath: str | Path) -> Path:
        """Save the image bytes to a file.

        Args:
            filepath: Path to write the image to

        Returns:
            The path written

        Raises:
            ValueError: If this is a stored response (there are no bytes to save)
        """
        data = self.as_bytes()
        if data is None:
            raise ValueError("stored screenshot responses carry no image bytes; fetch stored.url")
        path = Path(filepath)
        with open(path, "wb") as f:
            f.write(data)
        return path
