"""
Scenario tables for the operator.

Prints how many calls and how many upload bytes each n costs, so a run can be
sized before it is started.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from importlib.metadata import PackageNotFoundError, version
from typing import TextIO

from fibonacci_load.payload import expected_total_bytes

logger = logging.getLogger(__name__)

HTTP_STACK = ("aiohttp", "httpx", "prometheus_client")
"""Distributions whose versions are logged on startup."""


def number_of_calls(n: int) -> int:
    """Requests needed to compute fib(n) over the network, counting the root."""
    return fibonacci_sum(n, lambda _: 1)


def fibonacci_sum(n: int, entry: Callable[[int], int]) -> int:
    """Sum `entry` over every node of the call tree rooted at n."""
    if n <= 2:
        return entry(n)
    return entry(n) + fibonacci_sum(n - 1, entry) + fibonacci_sum(n - 2, entry)


def _print_fibonacci_pairs(
    calculate: Callable[[int], int],
    line: Callable[[int, int, int], str],
    out: TextIO | None,
) -> None:
    for n in range(3, 27):
        print(line(n, calculate(n - 1), calculate(n - 2)), file=out)


def print_number_of_calls(out: TextIO | None = None) -> None:
    print("Number of calls", file=out)
    _print_fibonacci_pairs(
        number_of_calls,
        lambda n, left, right: f"{n} requires 1+{left}+{right}={1 + left + right} calls.",
        out,
    )


def print_upload_bytes(out: TextIO | None = None) -> None:
    print("Upload total size\nn\tsize", file=out)
    for n in range(1, 26):
        size = expected_total_bytes(n)
        print(f"{n}\t{size} bytes\t({size // 1024} kB)", file=out)


def print_total_upload_size(out: TextIO | None = None) -> None:
    print("Total upload sizes", file=out)
    _print_fibonacci_pairs(
        expected_total_bytes,
        lambda n, left, right: f"{n} total upload size {(left + right) // 1024 // 1024} MB",
        out,
    )


def print_info(out: TextIO | None = None) -> None:
    """Print the call-count and upload-size tables to `out` (standard output by default)."""
    print_number_of_calls(out)
    print_upload_bytes(out)
    print_total_upload_size(out)


def log_library_versions() -> None:
    """Log the installed versions of the HTTP stack."""
    for name in HTTP_STACK:
        try:
            logger.info("%s version: %s", name, version(name))
        except PackageNotFoundError:
            logger.debug("%s version unknown", name)
