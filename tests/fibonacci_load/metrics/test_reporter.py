"""Tests for periodic metrics log lines."""

from __future__ import annotations

import asyncio
import logging

import pytest

from fibonacci_load.metrics import MetricsReporter, body_bytes_consumed, requests_served


class TestReport:
    """Tests for a single report line."""

    def test_line_contains_totals(self, caplog: pytest.LogCaptureFixture) -> None:
        reporter = MetricsReporter()

        with caplog.at_level(logging.INFO, logger="fibonacci_load.metrics"):
            line = reporter.report()

        assert line.startswith("requests=")
        assert "bodyConsumeRate=" in line
        assert line in caplog.text

    def test_rates_use_deltas_since_last_report(self) -> None:
        reporter = MetricsReporter()
        reporter.report()

        requests_served.inc(3)
        body_bytes_consumed.inc(1000)
        line = reporter.report()

        assert f"requests={int(requests_served._value.get())} " in line
        assert f"bodyBytes={int(body_bytes_consumed._value.get())}" in line

    def test_idle_interval_reports_zero_rate(self) -> None:
        reporter = MetricsReporter()
        reporter.report()
        line = reporter.report()
        assert "(0.0/s)" in line
        assert "bodyConsumeRate=0.0 bytes/s" in line


class TestBackgroundTask:
    """Tests for start() and stop()."""

    async def test_reports_periodically(self, caplog: pytest.LogCaptureFixture) -> None:
        reporter = MetricsReporter(interval=0.01)

        with caplog.at_level(logging.INFO, logger="fibonacci_load.metrics"):
            reporter.start()
            await asyncio.sleep(0.1)
            reporter.stop()

        assert caplog.text.count("requests=") >= 2

    async def test_stop_without_start_is_noop(self) -> None:
        MetricsReporter().stop()
