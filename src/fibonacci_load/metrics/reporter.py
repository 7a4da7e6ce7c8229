"""Periodic metrics log lines."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field

from .registry import sample

logger = logging.getLogger("fibonacci_load.metrics")


@dataclass(slots=True)
class MetricsReporter:
    """
    Log request and body throughput at a fixed interval.

    Rates are computed from the counter deltas between two reports.
    """

    interval: float = 15.0
    """Seconds between reports."""

    _last_requests: float = field(default=0.0, init=False)
    _last_bytes: float = field(default=0.0, init=False)
    _last_time: float = field(default_factory=time.monotonic, init=False)
    _task: asyncio.Task[None] | None = field(default=None, init=False)

    def start(self) -> None:
        """Start reporting in the background."""
        if self._task is None:
            self._last_time = time.monotonic()
            self._task = asyncio.create_task(self._run())

    def stop(self) -> None:
        """Stop reporting."""
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def report(self) -> str:
        """Log one line with totals and per-second rates, and return it."""
        now = time.monotonic()
        requests = sample("fibonacci_requests_total")
        consumed = sample("fibonacci_body_bytes_consumed_total")
        elapsed = max(now - self._last_time, 1e-9)

        line = (
            f"requests={int(requests)} ({(requests - self._last_requests) / elapsed:.1f}/s) "
            f"bodyConsumeRate={(consumed - self._last_bytes) / elapsed:.1f} bytes/s "
            f"bodyBytes={int(consumed)}"
        )
        logger.info(line)

        self._last_requests = requests
        self._last_bytes = consumed
        self._last_time = now
        return line

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.report()
