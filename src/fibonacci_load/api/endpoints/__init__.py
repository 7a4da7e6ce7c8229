"""API endpoint handlers."""

from . import fibonacci, metrics

__all__ = [
    "fibonacci",
    "metrics",
]
