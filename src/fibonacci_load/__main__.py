"""
Fibonacci load generator CLI entry point.

Starts a server that computes Fibonacci numbers by calling itself over HTTP on
many loopback addresses. Request it with e.g. ``curl http://127.0.0.1:8888/20``.

Usage::

    python -m fibonacci_load
    python -m fibonacci_load --post --ssl
    python -m fibonacci_load --print-info

Options:
    -p/--print-info          Print number of calls and upload sizes per n, then exit
    -s/--ssl                 Use https with a self-signed certificate
    --post                   Use POST with a generated request body
    --disable-pool           Disable the connection pool on the client
    --no-consume-on-server   Don't consume POST bodies on the server side
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from fibonacci_load.api import FibonacciServer
from fibonacci_load.config import DEFAULT_PORT, LOCAL_MAX, ScenarioConfig
from fibonacci_load.metrics import MetricsReporter
from fibonacci_load.reports import log_library_versions, print_info

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Log formatter that highlights child failures and rejected bodies."""

    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.WARNING: "\x1b[38;5;220m",
        logging.ERROR: "\x1b[38;5;196m",
        logging.CRITICAL: "\x1b[38;5;196;1m",
    }

    def __init__(self, datefmt: str | None = LOG_DATEFMT) -> None:
        super().__init__(LOG_FORMAT, datefmt)

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return line
        return f"{color}{line}{self.RESET}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(LOG_FORMAT, LOG_DATEFMT) if no_color else ColoredFormatter()
    )

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="fibonacci-load",
        description="Self-referential HTTP load generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-p",
        "--print-info",
        action="store_true",
        help="Print number of calls required for calculating fibonacci, then exit",
    )
    parser.add_argument("-s", "--ssl", action="store_true", help="Use https")
    parser.add_argument("--post", action="store_true", help="Use POST with request body")
    parser.add_argument(
        "--disable-pool",
        action="store_true",
        help="Disable the connection pool on the client",
    )
    parser.add_argument(
        "--no-consume-on-server",
        action="store_true",
        help="Don't consume POST body on server side",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Address to bind (default: 0.0.0.0)")
    parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help=f"Port to listen on (default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--peers",
        type=int,
        default=LOCAL_MAX,
        help=f"Number of loopback peer addresses to rotate over (default: {LOCAL_MAX})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--no-color", action="store_true", help="Disable colored log output")
    return parser


def config_from_args(args: argparse.Namespace) -> ScenarioConfig:
    """Translate parsed arguments into a validated configuration."""
    return ScenarioConfig(
        host=args.host,
        port=args.port,
        peer_count=args.peers,
        use_tls=args.ssl,
        use_post=args.post,
        disable_connection_pool=args.disable_pool,
        skip_server_body_consumption=args.no_consume_on_server,
    )


async def run_server(config: ScenarioConfig) -> None:
    """Run the server and the metrics reporter until cancelled."""
    reporter = MetricsReporter(interval=config.report_interval)
    server = FibonacciServer(config=config)

    reporter.start()
    try:
        await server.run()
    finally:
        reporter.stop()
        await server.shutdown()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.print_info:
        print_info()
        return 0

    setup_logging(verbose=args.verbose, no_color=args.no_color)

    try:
        config = config_from_args(args)
    except ValidationError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    if config.use_post:
        print("Using POST calls with request body.")
    if config.skip_server_body_consumption:
        print("The POST body won't be consumed to find possible problems in this case.")

    log_library_versions()

    try:
        asyncio.run(run_server(config))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")

    return 0


if __name__ == "__main__":
    sys.exit(main())
