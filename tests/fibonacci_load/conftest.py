"""Shared fixtures for Fibonacci load generator tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import pytest

from fibonacci_load.api import FibonacciServer
from fibonacci_load.config import ScenarioConfig
from tests.fibonacci_load.helpers import LoopbackTransport


@pytest.fixture
def loopback_transport() -> LoopbackTransport:
    """Fresh in-process transport."""
    return LoopbackTransport()


@pytest.fixture
async def start_server() -> AsyncIterator[Callable[..., Awaitable[str]]]:
    """
    Start servers bound to 127.0.0.1 and stop them after the test.

    The rotation pool is a single address so child calls stay on 127.0.0.1.
    Returns the base URL of the started server.
    """
    servers: list[FibonacciServer] = []

    async def _start(**overrides: Any) -> str:
        options: dict[str, Any] = {"host": "127.0.0.1", "peer_count": 1} | overrides
        config = ScenarioConfig(**options)
        server = FibonacciServer(config=config)
        await server.start()
        servers.append(server)
        return f"{config.scheme}://127.0.0.1:{config.port}"

    yield _start

    for server in servers:
        await server.shutdown()
