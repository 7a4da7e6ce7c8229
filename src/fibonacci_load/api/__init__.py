"""
HTTP server for the self-referential Fibonacci load test.

Provides HTTP endpoints for:
- GET|POST /<n> - Return fib(n), fanning out to peers for n > 2
- GET /metrics - Prometheus metrics endpoint
"""

from .endpoints.fibonacci import ParseError, parse_parameter
from .server import FibonacciServer

__all__ = [
    "FibonacciServer",
    "ParseError",
    "parse_parameter",
]
