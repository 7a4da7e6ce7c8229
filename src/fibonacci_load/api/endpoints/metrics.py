"""Prometheus scrape endpoint for the load counters."""

from aiohttp import web
from prometheus_client import CONTENT_TYPE_LATEST

from fibonacci_load.metrics import generate_metrics


async def handle(_request: web.Request) -> web.Response:
    """
    Serve the dedicated registry in the exposition format.

    The header is taken verbatim from prometheus_client so the advertised
    format version always matches what generate_metrics() emits.
    """
    return web.Response(body=generate_metrics(), headers={"Content-Type": CONTENT_TYPE_LATEST})
