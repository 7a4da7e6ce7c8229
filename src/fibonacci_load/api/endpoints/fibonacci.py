"""
Fibonacci endpoint handler.

A request for n > 2 is answered only after two things finish: the child calls
for n-1 and n-2, and (for POST) verification of the inbound body. The two run
concurrently and a failure on either side cancels the other. A failed body
never yields a 200, even when the sum is ready.
"""

from __future__ import annotations

import asyncio
import logging

from aiohttp import web

from fibonacci_load.config import RECEIVE_CHUNK_SIZE
from fibonacci_load.dispatch import FibonacciDispatcher, TransportFailure
from fibonacci_load.metrics import body_bytes_consumed, requests_served, verification_failures
from fibonacci_load.payload import PayloadVerifier, VerificationError, expected_total_bytes

logger = logging.getLogger(__name__)

DISPATCHER_KEY = web.AppKey("dispatcher", FibonacciDispatcher)
"""Application key holding the dispatcher for child calls."""

CONSUME_BODY_KEY = web.AppKey("consume_body", bool)
"""Application key holding whether POST bodies are read and verified."""


class ParseError(ValueError):
    """The path segment is not a non-negative decimal integer."""


def parse_parameter(segment: str) -> int:
    """
    Parse the Fibonacci parameter from a path segment.

    Only plain ASCII digits are accepted; signs, whitespace and empty
    segments are rejected.
    """
    if not segment or not segment.isascii() or not segment.isdigit():
        raise ParseError(f"Invalid Fibonacci parameter: {segment!r}")
    return int(segment)


async def handle(request: web.Request) -> web.Response:
    """
    Handle a Fibonacci request.

    Response: fib(n) as a plain-text decimal string.

    Status Codes:
        200 OK: Result computed and body (if any) verified.
        400 Bad Request: Path parameter is not a non-negative integer.
        422 Unprocessable Entity: POST body failed content or length verification.
        502 Bad Gateway: A child call failed.
    """
    try:
        n = parse_parameter(request.match_info["n"])
    except ParseError as exc:
        raise web.HTTPBadRequest(text=str(exc)) from exc

    requests_served.inc()
    consume_body = request.method == "POST" and request.app[CONSUME_BODY_KEY]

    if n <= 2:
        if consume_body:
            await _drain(request)
        return web.Response(text="1")

    dispatcher = request.app[DISPATCHER_KEY]
    try:
        async with asyncio.TaskGroup() as tg:
            fetch = tg.create_task(dispatcher.fetch(n))
            if consume_body:
                tg.create_task(_verify_body(request, expected_total_bytes(n)))
    except ExceptionGroup as group:
        # Whichever side fails first cancels the other.
        raise _http_error(n, group) from None

    return web.Response(text=str(fetch.result()))


def _http_error(n: int, group: ExceptionGroup) -> web.HTTPException:
    """Map a failed request's exception group to its HTTP error."""
    rejected, _ = group.split(VerificationError)
    if rejected is not None:
        error = rejected.exceptions[0]
        verification_failures.inc()
        logger.error("Rejecting body for n=%d: %s", n, error)
        return web.HTTPUnprocessableEntity(text=str(error))

    failed, rest = group.split(TransportFailure)
    if rest is not None:
        raise rest
    return web.HTTPBadGateway(text=str(failed.exceptions[0]))


async def _verify_body(request: web.Request, expected_total: int) -> None:
    """
    Stream the request body through a verifier.

    Raises the verifier's error on the first mismatching chunk, or on a
    length mismatch once the body ends.
    """
    verifier = PayloadVerifier(expected_total)

    async for chunk in request.content.iter_chunked(RECEIVE_CHUNK_SIZE):
        body_bytes_consumed.inc(len(chunk))
        mismatch = verifier.feed(chunk)
        if mismatch is not None:
            raise mismatch

    logger.info("Read %d bytes", verifier.received)
    error = verifier.finish()
    if error is not None:
        raise error


async def _drain(request: web.Request) -> None:
    """Read and discard a body that carries nothing to verify."""
    received = 0
    async for chunk in request.content.iter_chunked(RECEIVE_CHUNK_SIZE):
        received += len(chunk)
    body_bytes_consumed.inc(received)
    logger.info("Read %d bytes", received)
