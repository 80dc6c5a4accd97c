"""Synthetic endpoints: greeting, simulated errors, sleep and CPU burn."""

from __future__ import annotations

import asyncio
import time

from fastapi import Request, Response
from fastapi.responses import PlainTextResponse

from loadtarget.hasher import hash_random_data
from loadtarget.log import get_logger
from loadtarget.params import parse_with_default

logger = get_logger("handlers")

GREETING = "Hello from example application."
DEFAULT_WAIT_SEC = 5
DEFAULT_MB = 5
DEFAULT_ITERATIONS = 5
MB = 1024 * 1024

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000


def _decimal(value: int, unit: int) -> str:
    """``value / unit`` in decimal with trailing zeros dropped."""
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{frac:0{width}d}".rstrip("0")


def format_duration(seconds: float) -> str:
    """Render an elapsed time in the largest fitting units.

    ``500ns``, ``850µs``, ``12.25ms``, ``2.5s``, ``1m30.5s``, ``1h0m0s``.
    """
    ns = round(seconds * _NS_PER_S)
    if ns <= 0:
        return "0s"
    if ns < _NS_PER_US:
        return f"{ns}ns"
    if ns < _NS_PER_MS:
        return _decimal(ns, _NS_PER_US) + "µs"
    if ns < _NS_PER_S:
        return _decimal(ns, _NS_PER_MS) + "ms"

    minutes, rest = divmod(ns, 60 * _NS_PER_S)
    hours, minutes = divmod(minutes, 60)
    secs = _decimal(rest, _NS_PER_S) + "s"
    if hours:
        return f"{hours}h{minutes}m{secs}"
    if minutes:
        return f"{minutes}m{secs}"
    return secs


async def _pause(seconds: int) -> None:
    await asyncio.sleep(seconds)


def found(request: Request) -> Response:
    return PlainTextResponse(GREETING)


def not_found(request: Request) -> Response:
    return Response(status_code=404)


def internal_error(request: Request) -> Response:
    return Response(status_code=500)


async def wait(request: Request) -> Response:
    """Sleep ``waitSec`` seconds (default 5) and echo the literal value given."""
    wait_sec_str = request.path_params.get("wait_sec", "")
    wait_sec = parse_with_default(wait_sec_str, DEFAULT_WAIT_SEC)
    logger.debug("waiting %d seconds", wait_sec)
    await _pause(wait_sec)
    return PlainTextResponse(f"Waited for {wait_sec_str} seconds.")


def hash_work(request: Request) -> Response:
    """Hash ``mb`` megabytes of random data ``iterations`` times.

    Runs synchronously; the ASGI framework executes it on its thread pool.
    """
    mb = parse_with_default(request.path_params.get("mb"), DEFAULT_MB)
    iterations = parse_with_default(request.path_params.get("iterations"), DEFAULT_ITERATIONS)

    logger.info("Hashing %d mb, %d times", mb, iterations)
    start = time.perf_counter()
    for _ in range(iterations):
        digest = hash_random_data(mb * MB)
        logger.info("completed hash with result: %s", digest)
    elapsed = time.perf_counter() - start

    return PlainTextResponse(
        f"Hashing {mb} mb, {iterations} times took {format_duration(elapsed)}"
    )
