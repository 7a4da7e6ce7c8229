"""Tests for the streaming payload writer."""

from __future__ import annotations

import logging

import pytest

from fibonacci_load.payload import PayloadWriter, generate, total_bytes


class TestBlocks:
    """Tests for synchronous block generation."""

    def test_concatenation_has_total_length(self) -> None:
        body = b"".join(PayloadWriter(0).blocks())
        assert len(body) == total_bytes(0)

    def test_content_alternates_from_zero(self) -> None:
        """Byte k of the body is k mod 2, across block boundaries."""
        body = b"".join(PayloadWriter(0).blocks())
        assert body[:6] == b"\x00\x01\x00\x01\x00\x01"
        assert body[::2].count(0) == len(body[::2])
        assert body[1::2].count(1) == len(body[1::2])

    def test_block_sizes_follow_sequence(self) -> None:
        sizes = [len(block) for block in PayloadWriter(2).blocks()]
        assert sizes == list(generate(2))

    def test_second_block_starts_at_odd_offset(self) -> None:
        """The first block is 2901 bytes, so the second block starts with 1."""
        blocks = PayloadWriter(0).blocks()
        first = next(blocks)
        second = next(blocks)
        assert len(first) == 2901
        assert second[:2] == b"\x01\x00"

    def test_counter_tracks_emitted_bytes(self) -> None:
        writer = PayloadWriter(1)
        blocks = writer.blocks()
        first = next(blocks)
        assert writer.bytes_written == len(first)

        for _ in blocks:
            pass
        assert writer.bytes_written == total_bytes(1)

    def test_logs_written_bytes(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="fibonacci_load.payload.writer"):
            for _ in PayloadWriter(0).blocks():
                pass
        assert f"Wrote {total_bytes(0)} bytes" in caplog.text


class TestStream:
    """Tests for the async body stream."""

    async def test_stream_matches_blocks(self) -> None:
        streamed = [block async for block in PayloadWriter(0).stream()]
        assert b"".join(streamed) == b"".join(PayloadWriter(0).blocks())

    async def test_stream_counts_bytes(self) -> None:
        writer = PayloadWriter(3)
        async for _ in writer.stream():
            pass
        assert writer.bytes_written == 17_907_873
