"""Command-line demo for pxshot.

Captures a page as image bytes and saves it, optionally stores a second
capture on the server, and optionally prints account usage.

Usage:
    PXSHOT_API_KEY=px_... pxshot-demo --url https://example.com --store --usage
    PXSHOT_API_KEY=px_... pxshot-demo --full-page --wait-for-timeout 500 --scale 2 --blocking
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path

from . import (
    BlockingPxshot,
    ImageFormat,
    Pxshot,
    PxshotError,
    ResponseKind,
    ScreenshotRequest,
    ScreenshotResponse,
    Usage,
    WaitUntil,
    load_config,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def format_size(size: float) -> str:
    """Format byte size as human-readable string."""
    for unit in ["B", "KB", "MB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


def build_request(args: argparse.Namespace, store: bool = False) -> ScreenshotRequest:
    builder = ScreenshotRequest.builder().url(args.url)
    if args.format:
        builder.format(args.format)
    if args.quality is not None:
        builder.quality(args.quality)
    if args.width is not None:
        builder.width(args.width)
    if args.height is not None:
        builder.height(args.height)
    if args.full_page:
        builder.full_page(True)
    if args.wait_until:
        builder.wait_until(args.wait_until)
    if args.wait_for_selector:
        builder.wait_for_selector(args.wait_for_selector)
    if args.wait_for_timeout is not None:
        builder.wait_for_timeout(args.wait_for_timeout)
    if args.scale is not None:
        builder.device_scale_factor(args.scale)
    if args.block_ads:
        builder.block_ads(True)
    if store:
        builder.store(True)
    return builder.build()


def report(response: ScreenshotResponse, output: Path) -> None:
    match response.kind:
        case ResponseKind.BYTES:
            path = response.save(output)
            print(f"  Saved:      {path} ({format_size(len(response.data or b''))})")
        case ResponseKind.STORED:
            stored = response.as_stored()
            assert stored is not None
            print(f"  URL:        {stored.url}")
            print(f"  Dimensions: {stored.width}x{stored.height}")
            print(f"  Size:       {format_size(stored.size_bytes)}")
            print(f"  Expires at: {stored.expires_at.isoformat()}")


def report_usage(usage: Usage) -> None:
    print(f"  Screenshots this period: {usage.screenshots}")
    print(f"  Bytes used:              {format_size(usage.bytes)}")
    print(f"  Period:                  {usage.period_start:%Y-%m-%d} .. {usage.period_end:%Y-%m-%d}")


async def run_async(args: argparse.Namespace) -> None:
    async with Pxshot.from_config(load_config()) as client:
        print("Capturing screenshot...")
        start = time.perf_counter()
        response = await client.screenshot(build_request(args))
        logger.info(f"Capture took {(time.perf_counter() - start) * 1000:.0f}ms")
        report(response, Path(args.output))

        if args.store:
            print("\nCapturing with storage...")
            report(await client.screenshot(build_request(args, store=True)), Path(args.output))

        if args.usage:
            print("\nChecking usage...")
            report_usage(await client.usage())


def run_blocking(args: argparse.Namespace) -> None:
    with BlockingPxshot.from_config(load_config()) as client:
        print("Capturing screenshot (blocking)...")
        start = time.perf_counter()
        response = client.screenshot(build_request(args))
        logger.info(f"Capture took {(time.perf_counter() - start) * 1000:.0f}ms")
        report(response, Path(args.output))

        if args.store:
            print("\nCapturing with storage...")
            report(client.screenshot(build_request(args, store=True)), Path(args.output))

        if args.usage:
            print("\nChecking usage...")
            report_usage(client.usage())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Demo for the pxshot screenshot API client",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("-u", "--url", default="https://example.com", help="Page to capture")
    parser.add_argument("-o", "--output", default="screenshot.png", help="Where to save the image")
    parser.add_argument(
        "-f", "--format",
        choices=[f.value for f in ImageFormat],
        help="Image format (server default: png)",
    )
    parser.add_argument("-q", "--quality", type=int, help="JPEG/WebP quality (1-100)")
    parser.add_argument("--width", type=int, help="Viewport width")
    parser.add_argument("--height", type=int, help="Viewport height")
    parser.add_argument("--full-page", action="store_true", help="Capture the full scrollable page")
    parser.add_argument(
        "--wait-until",
        choices=[w.value for w in WaitUntil],
        help="Load milestone to wait for (server default: network_idle)",
    )
    parser.add_argument("--wait-for-selector", help="CSS selector to wait for")
    parser.add_argument("--wait-for-timeout", type=int, help="Extra wait after load (ms)")
    parser.add_argument("--scale", type=float, help="Device scale factor (1-3)")
    parser.add_argument("--block-ads", action="store_true", help="Block ads and trackers")
    parser.add_argument("--store", action="store_true", help="Also capture with server-side storage")
    parser.add_argument("--usage", action="store_true", help="Print account usage")
    parser.add_argument("--blocking", action="store_true", help="Use the blocking client")
    return parser


def main() -> None:
    """Main entry point."""
    args = build_parser().parse_args()

    try:
        if args.blocking:
            run_blocking(args)
        else:
            asyncio.run(run_async(args))
    except PxshotError as e:
        print(f"\n✗ {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
