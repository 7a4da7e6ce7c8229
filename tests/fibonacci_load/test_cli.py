"""Tests for the command line entry point."""

from __future__ import annotations

import logging

import pytest

from fibonacci_load.__main__ import (
    ColoredFormatter,
    build_parser,
    config_from_args,
    main,
)


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        config = config_from_args(args)

        assert args.print_info is False
        assert config.port == 8888
        assert config.peer_count == 250
        assert config.use_tls is False

    def test_flags_map_to_config(self) -> None:
        args = build_parser().parse_args(
            ["-s", "--post", "--disable-pool", "--no-consume-on-server", "--port", "9000"]
        )
        config = config_from_args(args)

        assert config.use_tls is True
        assert config.use_post is True
        assert config.disable_connection_pool is True
        assert config.skip_server_body_consumption is True
        assert config.port == 9000

    @pytest.mark.parametrize("flag", ["-p", "--print-info"])
    def test_print_info_flag(self, flag: str) -> None:
        assert build_parser().parse_args([flag]).print_info is True


class TestMain:
    """Tests for main()."""

    def test_print_info_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--print-info"]) == 0

        output = capsys.readouterr().out
        assert output.startswith("Number of calls")
        assert "Total upload sizes" in output

    def test_invalid_config_exits_nonzero(self) -> None:
        root = logging.getLogger()
        handlers = list(root.handlers)
        try:
            assert main(["--peers", "0", "--no-color"]) == 2
        finally:
            for handler in root.handlers[:]:
                if handler not in handlers:
                    root.removeHandler(handler)


class TestColoredFormatter:
    """Tests for log formatting."""

    def test_info_lines_are_plain(self) -> None:
        record = logging.LogRecord(
            "fibonacci_load", logging.INFO, __file__, 1, "Read %d bytes", (7,), None
        )
        line = ColoredFormatter().format(record)

        assert "INFO" in line
        assert "fibonacci_load" in line
        assert "\x1b[" not in line
        assert line.endswith("Read 7 bytes")

    def test_errors_are_highlighted(self) -> None:
        record = logging.LogRecord(
            "fibonacci_load", logging.ERROR, __file__, 1, "boom %d", (7,), None
        )
        line = ColoredFormatter().format(record)

        assert line.startswith(ColoredFormatter.LEVEL_COLORS[logging.ERROR])
        assert line.endswith(f"boom 7{ColoredFormatter.RESET}")
        assert "ERROR" in line
