"""
Recursive fan-out over synthetic loopback peers.

Every call for n > 2 issues two concurrent HTTP calls for n-1 and n-2, each to
the next address in a process-wide rotation.
"""

from .dispatcher import FibonacciDispatcher
from .rotation import AddressRotation
from .transport import HttpTransport, Transport, TransportFailure

__all__ = [
    "AddressRotation",
    "FibonacciDispatcher",
    "HttpTransport",
    "Transport",
    "TransportFailure",
]
