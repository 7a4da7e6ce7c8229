"""
Metrics module for observability.

Provides counters for served requests, consumed body bytes and failures.
Exposes metrics in Prometheus text format and as periodic log lines.
"""

from .registry import (
    REGISTRY,
    body_bytes_consumed,
    child_requests,
    generate_metrics,
    requests_served,
    sample,
    transport_failures,
    verification_failures,
)
from .reporter import MetricsReporter

__all__ = [
    "MetricsReporter",
    "REGISTRY",
    "body_bytes_consumed",
    "child_requests",
    "generate_metrics",
    "requests_served",
    "sample",
    "transport_failures",
    "verification_failures",
]
