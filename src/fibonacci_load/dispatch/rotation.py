"""Round-robin selection of synthetic peer addresses."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from fibonacci_load.config import DEFAULT_PORT, LOCAL_MAX, LOCAL_PREFIX


@dataclass(slots=True)
class AddressRotation:
    """
    Thread-safe round-robin over loopback peer addresses.

    The pool is 127.0.0.1 through 127.0.0.<pool_size>. One shared counter
    picks the next address, so concurrent fan-outs interleave over the pool.
    The counter is never reset.
    """

    pool_size: int = LOCAL_MAX
    """Number of distinct peer addresses."""

    port: int = DEFAULT_PORT
    """Port every peer listens on."""

    prefix: str = LOCAL_PREFIX
    """Address prefix; the last octet is appended."""

    _counter: int = field(default=0, init=False)
    """Calls to next() so far."""

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)
    """Thread lock for concurrent access."""

    def __post_init__(self) -> None:
        if not 1 <= self.pool_size <= LOCAL_MAX:
            raise ValueError(f"pool_size must be in 1..{LOCAL_MAX}, got {self.pool_size}")

    @property
    def addresses(self) -> list[str]:
        """All pool addresses, in rotation order."""
        return [self._address(slot) for slot in range(self.pool_size)]

    def next(self) -> str:
        """
        Allocate the next peer address.

        Returns:
            "host:port" string, wrapping after pool_size calls.
        """
        with self._lock:
            slot = self._counter % self.pool_size
            self._counter += 1
        return self._address(slot)

    def _address(self, slot: int) -> str:
        return f"{self.prefix}{slot + 1}:{self.port}"
