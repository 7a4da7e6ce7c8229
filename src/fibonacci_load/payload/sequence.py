"""
Block-size sequence for deterministic payloads.

Block sizes are 967 times a small prime. The multipliers produce blocks that
are only divisible by their prime, so a transport reading in fixed-size chunks
sees many different remainders at block boundaries.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Final

BASE_BLOCK_COUNT: Final = 241
"""Blocks in every payload, including n = 0."""

BLOCKS_PER_STEP: Final = 67
"""Additional blocks per unit of n."""

BLOCK_UNIT: Final = 967
"""Bytes per multiplier unit."""

MULTIPLIERS: Final = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41,
    43, 47, 53, 59, 61, 67, 71, 73, 79, 83, 89, 97,
)  # fmt: skip
"""Primes below 100, indexed by block number modulo their count."""

_EVEN_PAIR: Final = b"\x00\x01"
_ODD_PAIR: Final = b"\x01\x00"


def block_count(n: int) -> int:
    """Number of blocks in the payload for n."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    return BASE_BLOCK_COUNT + n * BLOCKS_PER_STEP


def generate(n: int) -> Iterator[int]:
    """
    Yield the block sizes of the payload for n.

    Block numbers start at 1. The multiplier for a block is taken from
    MULTIPLIERS at (block number mod 25), so the first block uses 3 and every
    25th block uses 2.

    Each call returns a fresh iterator; the sequence depends on n alone.
    """
    for block_number in range(1, block_count(n) + 1):
        yield BLOCK_UNIT * MULTIPLIERS[block_number % len(MULTIPLIERS)]


def offsets_and_sizes(n: int) -> Iterator[tuple[int, int]]:
    """
    Yield (running offset, block size) pairs for the payload of n.

    The running offset is the number of bytes emitted before the block.
    """
    offset = 0
    for size in generate(n):
        yield offset, size
        offset += size


def total_bytes(n: int) -> int:
    """Total payload length for n, by summing the full sequence."""
    return sum(generate(n))


def expected_total_bytes(n: int) -> int:
    """
    Total payload length for n, without walking the blocks.

    Every run of 25 consecutive blocks uses each multiplier once. The blocks
    past the last full run have block numbers congruent to 1, 2, ... mod 25.
    """
    cycles, leftover = divmod(block_count(n), len(MULTIPLIERS))
    units = cycles * sum(MULTIPLIERS) + sum(MULTIPLIERS[1 : leftover + 1])
    return BLOCK_UNIT * units


def total_bytes_incremental(n: int) -> int:
    """
    Total payload length for n, from the last running offset.

    Streaming consumers only see (offset, size) pairs. The total is the
    offset of the final block plus its own size.
    """
    offset, size = 0, 0
    for offset, size in offsets_and_sizes(n):
        pass
    return offset + size


def alternating_bytes(offset: int, size: int) -> bytes:
    """
    Return `size` pattern bytes starting at global position `offset`.

    The byte at global position k is k mod 2.
    """
    pair = _EVEN_PAIR if offset % 2 == 0 else _ODD_PAIR
    return (pair * (size // 2 + 1))[:size]
