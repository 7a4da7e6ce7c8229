"""Streaming writer for deterministic request bodies."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass

from .sequence import alternating_bytes, offsets_and_sizes

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PayloadWriter:
    """
    Produce the body for parameter n one block at a time.

    Each block is built from its running offset alone, so blocks are
    independent and at most one is held in memory.
    """

    n: int
    """Parameter the body is generated for."""

    bytes_written: int = 0
    """Bytes emitted so far."""

    def blocks(self) -> Iterator[bytes]:
        """Yield the body blocks in order."""
        try:
            for offset, size in offsets_and_sizes(self.n):
                block = alternating_bytes(offset, size)
                self.bytes_written += size
                yield block
        finally:
            logger.info("Wrote %d bytes", self.bytes_written)

    async def stream(self) -> AsyncIterator[bytes]:
        """
        Yield the body blocks for an async HTTP client.

        Control returns to the event loop between blocks so that a large body
        does not starve concurrent requests.
        """
        for block in self.blocks():
            yield block
            await asyncio.sleep(0)
