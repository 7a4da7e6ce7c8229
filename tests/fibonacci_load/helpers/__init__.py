"""Test helpers: in-process transports and dispatcher construction."""

from .transports import (
    FailingTransport,
    LoopbackTransport,
    StaticTransport,
    make_dispatcher,
)

__all__ = [
    "FailingTransport",
    "LoopbackTransport",
    "StaticTransport",
    "make_dispatcher",
]
