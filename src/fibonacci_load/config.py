"""
Global configuration for the Fibonacci load generator.

The scenario toggles are collected into one validated model at startup. Every
other component receives the fields it needs rather than reading flags.
"""

from typing import Final

from pydantic import field_validator

from .base import StrictBaseModel

LOCAL_PREFIX: Final = "127.0.0."
"""
Loopback prefix for synthetic peers.

The loopback space is 127.0.0.0/8. Using many addresses works around the 2^16
ephemeral port limit between a single pair of endpoints.
"""

LOCAL_MAX: Final = 250
"""Largest number of distinct synthetic peer addresses."""

DEFAULT_PORT: Final = 8888
"""Port every synthetic peer listens on."""

RECEIVE_CHUNK_SIZE: Final = 32 * 1024
"""Largest chunk read from an inbound body at once."""

CONNECT_TIMEOUT_SECS: Final = 120.0
"""Outbound connect timeout. Deep fan-out trees queue many connects."""

REPORT_INTERVAL_SECS: Final = 15.0
"""Interval between metrics log lines."""


class ScenarioConfig(StrictBaseModel):
    """Runtime configuration for one load generator process."""

    host: str = "0.0.0.0"
    """Address to bind. The wildcard address answers on every loopback peer."""

    port: int = DEFAULT_PORT
    """Port to listen on."""

    peer_port: int | None = None
    """Port used in peer URLs. Defaults to the listening port."""

    peer_count: int = LOCAL_MAX
    """Number of loopback addresses in the rotation pool."""

    use_tls: bool = False
    """Serve and call over https with a self-signed certificate."""

    use_post: bool = False
    """Send child calls as POST with a generated body instead of GET."""

    disable_connection_pool: bool = False
    """Open a fresh connection for every outbound call."""

    skip_server_body_consumption: bool = False
    """Leave POST bodies unread on the server, for diagnostics."""

    connect_timeout: float = CONNECT_TIMEOUT_SECS
    """Outbound connect timeout in seconds."""

    report_interval: float = REPORT_INTERVAL_SECS
    """Seconds between metrics log lines."""

    @field_validator("port", "peer_port")
    @classmethod
    def _check_port(cls, value: int | None) -> int | None:
        if value is not None and not 0 < value < 65536:
            raise ValueError(f"port must be in 1..65535, got {value}")
        return value

    @field_validator("peer_count")
    @classmethod
    def _check_peer_count(cls, value: int) -> int:
        if not 1 <= value <= LOCAL_MAX:
            raise ValueError(f"peer_count must be in 1..{LOCAL_MAX}, got {value}")
        return value

    @field_validator("connect_timeout", "report_interval")
    @classmethod
    def _check_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError(f"must be positive, got {value}")
        return value

    @property
    def scheme(self) -> str:
        """URL scheme for outbound calls."""
        return "https" if self.use_tls else "http"

    @property
    def effective_peer_port(self) -> int:
        """Port placed in peer URLs."""
        return self.port if self.peer_port is None else self.peer_port
