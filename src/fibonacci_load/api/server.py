"""
HTTP server for the Fibonacci fan-out and metrics endpoints.

The server is also its own set of peers: child calls go to other loopback
addresses on the same port and land back here.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from aiohttp import web

from fibonacci_load.config import ScenarioConfig
from fibonacci_load.dispatch import AddressRotation, FibonacciDispatcher, HttpTransport
from fibonacci_load.tls import server_ssl_context

from .endpoints.fibonacci import CONSUME_BODY_KEY, DISPATCHER_KEY
from .routes import ROUTES

logger = logging.getLogger(__name__)

TRANSPORT_KEY = web.AppKey("transport", HttpTransport)
"""Application key holding the outbound transport, closed on cleanup."""


async def _close_transport(app: web.Application) -> None:
    await app[TRANSPORT_KEY].aclose()


@dataclass(slots=True)
class FibonacciServer:
    """
    HTTP server that computes Fibonacci numbers by calling itself.

    Uses aiohttp for inbound requests and httpx for child calls.
    """

    config: ScenarioConfig
    """Scenario configuration."""

    _runner: web.AppRunner | None = field(default=None, init=False)
    """The aiohttp application runner."""

    _site: web.TCPSite | None = field(default=None, init=False)
    """The TCP site for the server."""

    def create_app(self) -> web.Application:
        """Build the application with its dispatcher and routes."""
        config = self.config
        transport = HttpTransport(
            verify=not config.use_tls,
            disable_pool=config.disable_connection_pool,
            connect_timeout=config.connect_timeout,
        )
        dispatcher = FibonacciDispatcher(
            transport=transport,
            rotation=AddressRotation(
                pool_size=config.peer_count,
                port=config.effective_peer_port,
            ),
            scheme=config.scheme,
            use_post=config.use_post,
        )

        app = web.Application()
        app[TRANSPORT_KEY] = transport
        app[DISPATCHER_KEY] = dispatcher
        app[CONSUME_BODY_KEY] = not config.skip_server_body_consumption
        app.on_cleanup.append(_close_transport)
        app.add_routes([web.route(method, path, handler) for method, path, handler in ROUTES])
        return app

    async def start(self) -> None:
        """Start the server in the background."""
        ssl_context = server_ssl_context() if self.config.use_tls else None

        self._runner = web.AppRunner(self.create_app())
        await self._runner.setup()

        self._site = web.TCPSite(
            self._runner,
            self.config.host,
            self.config.port,
            ssl_context=ssl_context,
        )
        await self._site.start()

        logger.info("%s server started on port %d", self.config.scheme, self.config.port)

    async def run(self) -> None:
        """
        Run the server until shutdown.

        This method blocks until stop() is called.
        """
        await self.start()

        while self._runner is not None:
            await asyncio.sleep(1)

    def stop(self) -> None:
        """Request graceful shutdown."""
        if self._runner is not None:
            asyncio.create_task(self.shutdown())

    async def shutdown(self) -> None:
        """Gracefully stop the server and close outbound connections."""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            self._site = None
            logger.info("%s server stopped", self.config.scheme)
