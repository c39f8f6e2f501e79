from __future__ import annotations

import json
from dataclasses import dataclass, field

import httpx
import pytest

PNG_BYTES = b"\x89PNG\r\n\x1a\nFAKEPNG"

STORED_BODY = {
    "url": "https://cdn.pxshot.com/s/abc123.png",
    "expires_at": "2026-11-01T12:00:00Z",
    "width": 1280,
    "height": 720,
    "size_bytes": 48213,
}

USAGE_BODY = {
    "screenshots": 42,
    "bytes": 1048576,
    "period_start": "2026-10-01T00:00:00Z",
    "period_end": "2026-11-01T00:00:00Z",
}


@dataclass
class FakeApi:
    """Canned pxshot server for httpx.MockTransport.

    Records every request it sees and answers with whatever the test set.
    """

    status: int = 200
    body: bytes = PNG_BYTES
    content_type: str = "image/png"
    requests: list[httpx.Request] = field(default_factory=list)

    def respond_json(self, payload: object, status: int = 200) -> None:
        self.status = status
        self.body = json.dumps(payload).encode()
        self.content_type = "application/json"

    def respond_raw(self, body: bytes, status: int = 200, content_type: str = "text/plain") -> None:
        self.status = status
        self.body = body
        self.content_type = content_type

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            self.status,
            content=self.body,
            headers={"Content-Type": self.content_type},
        )

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def transport(fake_api: FakeApi) -> httpx.MockTransport:
    return httpx.MockTransport(fake_api.handler)
