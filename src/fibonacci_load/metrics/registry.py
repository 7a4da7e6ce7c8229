"""
Metric registry using prometheus_client.

Exposes metrics in Prometheus text format via the /metrics endpoint.
"""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, generate_latest

# Dedicated registry so that default process metrics stay out of the output.
REGISTRY = CollectorRegistry()

# -----------------------------------------------------------------------------
# Serving
# -----------------------------------------------------------------------------

requests_served = Counter(
    "fibonacci_requests",
    "Requests accepted by the Fibonacci endpoint",
    registry=REGISTRY,
)

body_bytes_consumed = Counter(
    "fibonacci_body_bytes_consumed",
    "Request body bytes read and verified",
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Fan-out
# -----------------------------------------------------------------------------

child_requests = Counter(
    "fibonacci_child_requests",
    "Child calls issued to peers",
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Failures
# -----------------------------------------------------------------------------

verification_failures = Counter(
    "fibonacci_verification_failures",
    "Request bodies that failed content or length verification",
    registry=REGISTRY,
)

transport_failures = Counter(
    "fibonacci_transport_failures",
    "Child calls that failed or returned an unusable response",
    registry=REGISTRY,
)


def sample(name: str) -> float:
    """Current value of a counter by its exported name, e.g. "fibonacci_requests_total"."""
    return REGISTRY.get_sample_value(name) or 0.0


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics output.

    Returns:
        Prometheus text format output as bytes.
    """
    return generate_latest(REGISTRY)
