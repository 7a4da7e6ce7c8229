"""Tests for the Prometheus metrics registry."""

from __future__ import annotations

from fibonacci_load.metrics import (
    REGISTRY,
    body_bytes_consumed,
    child_requests,
    generate_metrics,
    requests_served,
    sample,
    transport_failures,
    verification_failures,
)


class TestMetricTypes:
    """Tests for counter behavior."""

    def test_counter_increments_correctly(self) -> None:
        """Counter metrics increment by one on each call."""
        initial = requests_served._value.get()
        requests_served.inc()
        assert requests_served._value.get() == initial + 1.0

    def test_counter_increments_by_amount(self) -> None:
        initial = body_bytes_consumed._value.get()
        body_bytes_consumed.inc(2901)
        assert body_bytes_consumed._value.get() == initial + 2901.0

    def test_sample_reads_exported_name(self) -> None:
        child_requests.inc()
        assert sample("fibonacci_child_requests_total") == child_requests._value.get()

    def test_sample_of_unknown_metric_is_zero(self) -> None:
        assert sample("fibonacci_unknown_total") == 0.0


class TestPrometheusOutput:
    """Tests for Prometheus text format output."""

    def test_generate_metrics_returns_bytes(self) -> None:
        assert isinstance(generate_metrics(), bytes)

    def test_output_contains_metric_names(self) -> None:
        output = generate_metrics().decode()
        for name in (
            "fibonacci_requests_total",
            "fibonacci_body_bytes_consumed_total",
            "fibonacci_child_requests_total",
            "fibonacci_verification_failures_total",
            "fibonacci_transport_failures_total",
        ):
            assert name in output

    def test_failure_counters_registered(self) -> None:
        names = {metric.name for metric in REGISTRY.collect()}
        assert {"fibonacci_verification_failures", "fibonacci_transport_failures"} <= names
        assert verification_failures is not None
        assert transport_failures is not None
