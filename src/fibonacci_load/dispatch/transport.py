"""
Outbound HTTP capability for the dispatcher.

The dispatcher only needs one operation: send a request and return the text
body. Tests substitute an in-process implementation.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable
from typing import Protocol

import httpx

from fibonacci_load.metrics import transport_failures

logger = logging.getLogger(__name__)


class TransportFailure(Exception):
    """
    A child call could not produce a usable response.

    Covers refused connections, timeouts, non-success statuses and bodies
    that do not parse as a number. Never retried: the parent cannot build a
    sum without the child.
    """

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"{url}: {message}")


class Transport(Protocol):
    """Capability to issue a single HTTP request."""

    async def request(
        self,
        method: str,
        url: str,
        content: AsyncIterable[bytes] | None = None,
    ) -> str:
        """Send the request and return the decoded response body."""
        ...


class HttpTransport:
    """Transport backed by a shared httpx client."""

    def __init__(
        self,
        *,
        verify: bool = True,
        disable_pool: bool = False,
        connect_timeout: float = 120.0,
    ) -> None:
        # No read timeout: a deep tree holds the root response open for long.
        timeout = httpx.Timeout(None, connect=connect_timeout)
        limits = httpx.Limits(
            max_connections=None,
            max_keepalive_connections=0 if disable_pool else None,
        )
        self._client = httpx.AsyncClient(verify=verify, timeout=timeout, limits=limits)

    async def request(
        self,
        method: str,
        url: str,
        content: AsyncIterable[bytes] | None = None,
    ) -> str:
        try:
            response = await self._client.request(method, url, content=content)
            response.raise_for_status()
            return response.text
        except httpx.HTTPStatusError as exc:
            transport_failures.inc()
            raise TransportFailure(
                url, f"HTTP error {exc.response.status_code}: {exc.response.text[:200]}"
            ) from exc
        except httpx.HTTPError as exc:
            transport_failures.inc()
            raise TransportFailure(url, f"{type(exc).__name__}: {exc}") from exc

    async def aclose(self) -> None:
        """Close pooled connections."""
        await self._client.aclose()
