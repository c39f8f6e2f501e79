"""Response decoding shared by the async and blocking clients.

Everything here works on an ``httpx.Response`` whose body has already been
read, so both clients run exactly the same dispatch.
"""

from __future__ import annotations

from http import HTTPStatus
import logging

import httpx
from pydantic import ValidationError

from .errors import ApiError, ParseError
from .types import ApiErrorBody, ScreenshotResponse, StoredScreenshot, Usage

logger = logging.getLogger(__name__)

SCREENSHOT_PATH = "/v1/screenshot"
USAGE_PATH = "/v1/usage"

UNKNOWN_ERROR = "Unknown error"


def reason_phrase(status: int) -> str:
    """Standard reason phrase for ``status``, or "Unknown error"."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return UNKNOWN_ERROR


def api_error_from(response: httpx.Response) -> ApiError:
    """Turn a non-2xx response into an ApiError.

    Uses the server's ``{"error": ...}`` text when the body decodes; otherwise
    falls back to the status reason phrase. The decode failure itself is only
    logged.
    """
    status = response.status_code
    try:
        body = ApiErrorBody.model_validate_json(response.content)
    except ValidationError as e:
        logger.debug(f"Undecodable error body for HTTP {status}: {e}")
        return ApiError(status, reason_phrase(status))
    return ApiError(status, body.error)


def decode_screenshot(response: httpx.Response, store: bool) -> ScreenshotResponse:
    """Pick the response variant from the request's ``store`` flag.

    The body is never inspected to choose the variant.
    """
    if not response.is_success:
        raise api_error_from(response)

    if store:
        try:
            stored = StoredScreenshot.model_validate_json(response.content)
        except ValidationError as e:
            raise ParseError(f"failed to parse stored screenshot response: {e}") from e
        logger.debug(f"Stored screenshot at {stored.url} ({stored.size_bytes} bytes)")
        return ScreenshotResponse.from_stored(stored)

    logger.debug(f"Received {len(response.content)} image bytes")
    return ScreenshotResponse.from_bytes(response.content)


def decode_usage(response: httpx.Response) -> Usage:
    if not response.is_success:
        raise api_error_from(response)
    try:
        return Usage.model_validate_json(response.content)
    except ValidationError as e:
        raise ParseError(f"failed to parse usage response: {e}") from e
