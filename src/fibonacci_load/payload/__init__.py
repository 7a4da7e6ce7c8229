"""
Deterministic request payloads.

A payload for parameter n is a sequence of blocks whose sizes follow a fixed
prime-multiplier pattern, filled with alternating 0/1 bytes. Sender and
receiver both derive the pattern from n alone, so any lost, duplicated or
corrupted byte on the wire is detectable.
"""

from .exceptions import ContentMismatch, LengthMismatch, VerificationError
from .sequence import (
    alternating_bytes,
    expected_total_bytes,
    generate,
    offsets_and_sizes,
    total_bytes,
    total_bytes_incremental,
)
from .verifier import PayloadVerifier
from .writer import PayloadWriter

__all__ = [
    "ContentMismatch",
    "LengthMismatch",
    "PayloadVerifier",
    "PayloadWriter",
    "VerificationError",
    "alternating_bytes",
    "expected_total_bytes",
    "generate",
    "offsets_and_sizes",
    "total_bytes",
    "total_bytes_incremental",
]
