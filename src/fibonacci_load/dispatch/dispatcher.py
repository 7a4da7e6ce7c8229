"""Recursive Fibonacci fan-out over HTTP."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from fibonacci_load.metrics import child_requests, transport_failures
from fibonacci_load.payload import PayloadWriter

from .rotation import AddressRotation
from .transport import Transport, TransportFailure

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FibonacciDispatcher:
    """
    Compute fib(n) by asking two peers for fib(n-1) and fib(n-2).

    The peers are the same server reached through different loopback
    addresses, so each child call recurses further until the base case.
    """

    transport: Transport
    """Capability used for every child call."""

    rotation: AddressRotation
    """Shared source of peer addresses."""

    scheme: str = "http"
    """URL scheme of child calls."""

    use_post: bool = False
    """Attach a generated body to every child call."""

    async def fetch(self, n: int) -> int:
        """
        Return fib(n), where fib(1) = fib(2) = 1.

        For n <= 2 no request is made. Otherwise both child calls start
        together and the result is their sum. A failing child cancels its
        sibling, and the failure propagates.
        """
        if n <= 2:
            return 1

        try:
            async with asyncio.TaskGroup() as tg:
                left = tg.create_task(self.call(n - 1))
                right = tg.create_task(self.call(n - 2))
        except ExceptionGroup as group:
            # The sum is meaningless without both children.
            raise group.exceptions[0] from None

        return left.result() + right.result()

    async def call(self, n: int) -> int:
        """Issue one child call for n to the next peer."""
        url = f"{self.scheme}://{self.rotation.next()}/{n}"
        child_requests.inc()

        try:
            if self.use_post:
                # The body is sized for the child's own n. The receiver derives
                # the same size independently.
                body = await self.transport.request("POST", url, PayloadWriter(n).stream())
            else:
                body = await self.transport.request("GET", url)
        except TransportFailure as exc:
            logger.warning("Child call failed: %s", exc)
            raise

        text = body.strip()
        if not text.isascii() or not text.isdigit():
            transport_failures.inc()
            logger.warning("Unparseable response from %s: %r", url, body[:64])
            raise TransportFailure(url, f"response is not a number: {body[:64]!r}")
        return int(text)
