"""Client tuning knobs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """
    Settings for a single request round trip.

    Attributes:
        connect_timeout: Seconds allowed for the TCP connect, None waits forever
        read_timeout: Seconds allowed for each socket receive, None waits forever
        max_line_bytes: Longest status/header line accepted by the decoder
        strict_headers: Raise on a stream that ends inside the header block
            instead of treating it as the end of the block
        chunk_size: Bytes requested from the socket per receive
    """
    connect_timeout: float | None = None
    read_timeout: float | None = None
    max_line_bytes: int = 64 * 1024
    strict_headers: bool = False
    chunk_size: int = 4096

    def __post_init__(self):
        if self.max_line_bytes <= 0:
            raise ValueError("max_line_bytes must be positive")
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        for name in ("connect_timeout", "read_timeout"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive or None")
