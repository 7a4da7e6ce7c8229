"""API route definitions."""

from collections.abc import Awaitable, Callable

from aiohttp import web

from .endpoints import fibonacci, metrics

ROUTES: list[tuple[str, str, Callable[[web.Request], Awaitable[web.StreamResponse]]]] = [
    # Registered first so the literal path wins over the parameter route.
    ("GET", "/metrics", metrics.handle),
    ("GET", "/{n}", fibonacci.handle),
    ("POST", "/{n}", fibonacci.handle),
]
"""All API routes as (method, path, handler), in match order."""
