"""Incremental verifier for deterministic request bodies."""

from __future__ import annotations

from dataclasses import dataclass, field

from .exceptions import ContentMismatch, LengthMismatch, VerificationError
from .sequence import alternating_bytes


@dataclass(slots=True)
class PayloadVerifier:
    """
    Check one inbound body against the alternating 0/1 pattern.

    Chunks may arrive in any size; the global byte counter carries the
    position across them. Failures are returned, not raised, so the caller
    decides how to abort the request.

    A verifier belongs to exactly one body stream.
    """

    expected_total: int
    """Number of bytes the body must contain."""

    received: int = 0
    """Bytes consumed so far."""

    error: VerificationError | None = field(default=None, init=False)
    """First failure seen, if any."""

    def feed(self, chunk: bytes) -> ContentMismatch | None:
        """
        Consume one chunk.

        Returns:
            None if every byte matched, or the mismatch for the first wrong
            byte. After a mismatch the verifier stops consuming.
        """
        if isinstance(self.error, ContentMismatch):
            return self.error

        expected = alternating_bytes(self.received, len(chunk))
        if chunk == expected:
            self.received += len(chunk)
            return None

        position = next(i for i, (a, b) in enumerate(zip(chunk, expected)) if a != b)
        mismatch = ContentMismatch(
            index=self.received + position,
            expected_total=self.expected_total,
            expected=expected[position],
            actual=chunk[position],
            position=position,
        )
        self.received += position
        self.error = mismatch
        return mismatch

    def finish(self) -> VerificationError | None:
        """
        Close the stream and compare the final count with the expected total.

        Returns:
            The earlier content mismatch if there was one, a length mismatch
            if the count is off, or None when the body was intact.
        """
        if self.error is None and self.received != self.expected_total:
            self.error = LengthMismatch(expected=self.expected_total, actual=self.received)
        return self.error
