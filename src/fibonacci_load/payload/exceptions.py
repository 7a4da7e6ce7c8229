"""Payload verification errors."""

from __future__ import annotations


class VerificationError(Exception):
    """
    Base class for payload verification failures.

    A verification failure is fatal to the request that carried the body.
    It is never retried.
    """


class ContentMismatch(VerificationError):
    """
    A body byte differs from the expected alternating pattern.

    Attributes:
        index: Global position of the offending byte, counted from zero.
        expected_total: Number of bytes the body should contain.
        expected: Byte value the pattern requires at this position.
        actual: Byte value that was received.
        position: Position of the byte within the chunk it arrived in.
    """

    def __init__(
        self,
        *,
        index: int,
        expected_total: int,
        expected: int,
        actual: int,
        position: int,
    ) -> None:
        self.index = index
        self.expected_total = expected_total
        self.expected = expected
        self.actual = actual
        self.position = position
        super().__init__(
            f"Unexpected byte received! index={index}/{expected_total}, "
            f"expected={expected}, value={actual}, position={position}"
        )


class LengthMismatch(VerificationError):
    """
    A body ended with a different byte count than expected.

    Attributes:
        expected: Number of bytes the body should contain.
        actual: Number of bytes that were received.
    """

    def __init__(self, *, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Unexpected byte count received! expected={expected}, received={actual}"
        )
