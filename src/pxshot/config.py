"""Client configuration.

Settings are plain frozen dataclasses read from the environment; there is no
pydantic-settings dependency.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from urllib.parse import urlsplit

from . import __version__
from .errors import ConfigError

DEFAULT_BASE_URL = "https://api.pxshot.com"
DEFAULT_TIMEOUT_SEC = 60.0
DEFAULT_USER_AGENT = f"pxshot-python/{__version__}"


def _normalize_base_url(base_url: str) -> str:
    base_url = base_url.strip().rstrip("/")
    parts = urlsplit(base_url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(f"invalid base URL: {base_url!r}")
    return base_url


def _check_api_key(api_key: str) -> str:
    if not api_key or not api_key.strip():
        raise ConfigError("API key must not be empty")
    try:
        api_key.encode("ascii")
    except UnicodeEncodeError:
        raise ConfigError("API key must be ASCII to fit in the Authorization header")
    if any(c in api_key for c in "\r\n\0"):
        raise ConfigError("API key contains control characters")
    return api_key


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings shared by the async and blocking clients.

    Attributes:
        api_key: API key sent as ``Authorization: Bearer <api_key>``
        base_url: API root; trailing slashes are stripped
        timeout_seconds: Transport timeout handed to httpx
        user_agent: User-Agent header value
    """

    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SEC
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        _check_api_key(self.api_key)
        object.__setattr__(self, "base_url", _normalize_base_url(self.base_url))
        if self.timeout_seconds <= 0:
            raise ConfigError(f"timeout must be positive: {self.timeout_seconds}")

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "User-Agent": self.user_agent,
        }

    def endpoint(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @classmethod
    def from_env(cls) -> ClientConfig:
        return load_config()


def load_config() -> ClientConfig:
    """Build a ClientConfig from PXSHOT_* environment variables.

    Raises:
        ConfigError: If PXSHOT_API_KEY is missing or a value is malformed
    """

    api_key = os.environ.get("PXSHOT_API_KEY", "").strip()
    if not api_key:
        raise ConfigError("PXSHOT_API_KEY environment variable is required")

    base_url = os.environ.get("PXSHOT_BASE_URL") or DEFAULT_BASE_URL

    timeout_env = os.environ.get("PXSHOT_TIMEOUT")
    if timeout_env:
        try:
            timeout_seconds = float(timeout_env)
        except ValueError:
            raise ConfigError(f"PXSHOT_TIMEOUT must be a number: {timeout_env!r}")
    else:
        timeout_seconds = DEFAULT_TIMEOUT_SEC

    return ClientConfig(
        api_key=api_key,
        base_url=base_url,
        timeout_seconds=timeout_seconds,
    )
