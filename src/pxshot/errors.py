"""Error types for the pxshot client."""

from __future__ import annotations


class PxshotError(Exception):
    """Base class for every failure raised by pxshot."""

    code = "PXSHOT_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"{self.code}: {message}")


class MissingFieldError(PxshotError):
    """A required request field was not set before build()."""

    code = "MISSING_FIELD"

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"missing required field: {field}")


class RequestError(PxshotError):
    """The HTTP exchange could not be completed (DNS, TLS, reset, timeout)."""

    code = "REQUEST_FAILED"

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"HTTP request failed: {cause}")


class ApiError(PxshotError):
    """The API answered with a non-2xx status."""

    code = "API_ERROR"

    def __init__(self, status: int, message: str):
        self.status = status
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.code} ({self.status}): {self.message}"


class ParseError(PxshotError):
    """A successful response body could not be decoded."""

    code = "PARSE_ERROR"


class ConfigError(PxshotError):
    """The client configuration is unusable."""

    code = "CONFIG_ERROR"
