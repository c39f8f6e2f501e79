from __future__ import annotations

import httpx
import pytest

from conftest import PNG_BYTES, USAGE_BODY, FakeApi
from pxshot import BlockingPxshot, ClientConfig, ImageFormat, WaitUntil
from pxshot import demo


def test_build_request_only_sends_given_options() -> None:
    args = demo.build_parser().parse_args(["--url", "https://example.com"])
    assert demo.build_request(args).to_payload() == {"url": "https://example.com"}


def test_build_request_full_page_options() -> None:
    args = demo.build_parser().parse_args(
        [
            "--url", "https://en.wikipedia.org/wiki/Python",
            "--format", "jpeg",
            "-q", "70",
            "--full-page",
            "--wait-until", "network_idle",
            "--wait-for-timeout", "500",
            "--scale", "2",
        ]
    )
    request = demo.build_request(args, store=True)
    assert request.format is ImageFormat.JPEG
    assert request.wait_until is WaitUntil.NETWORK_IDLE
    assert request.to_payload() == {
        "url": "https://en.wikipedia.org/wiki/Python",
        "format": "jpeg",
        "quality": 70,
        "full_page": True,
        "wait_until": "network_idle",
        "wait_for_timeout": 500,
        "device_scale_factor": 2.0,
        "store": True,
    }


def test_run_blocking_saves_image_and_prints_usage(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path,
    capsys: pytest.CaptureFixture[str],
    fake_api: FakeApi,
) -> None:
    class _MockedClient:
        @staticmethod
        def from_config(config: ClientConfig) -> BlockingPxshot:
            return BlockingPxshot.from_config(config, transport=transport)

    def answer(request: httpx.Request) -> httpx.Response:
        fake_api.requests.append(request)
        if request.url.path == "/v1/usage":
            return httpx.Response(200, json=USAGE_BODY)
        return httpx.Response(200, content=PNG_BYTES)

    transport = httpx.MockTransport(answer)
    monkeypatch.setenv("PXSHOT_API_KEY", "px_demo")
    monkeypatch.setattr(demo, "BlockingPxshot", _MockedClient)
    output = tmp_path / "shot.png"
    args = demo.build_parser().parse_args(["--output", str(output), "--usage", "--blocking"])

    demo.run_blocking(args)

    assert output.read_bytes() == PNG_BYTES
    assert [r.url.path for r in fake_api.requests] == ["/v1/screenshot", "/v1/usage"]
    assert "Screenshots this period: 42" in capsys.readouterr().out
