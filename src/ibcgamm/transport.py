"""Transport interface consumed by the module."""

from __future__ import annotations

from typing import Protocol


class Transport(Protocol):
    """Structural transport interface.

    The transport delivers packets and later reports acknowledgments and
    timeouts back through :class:`ibcgamm.module.GammQueryModule`. It must
    echo the original packet bytes unchanged with every acknowledgment.
    Having a protocol here keeps test doubles trivial.
    """

    def send_packet(self, channel_id: str, data: bytes, timeout: int) -> None:
        """Queue *data* on *channel_id*; *timeout* is an absolute deadline in nanoseconds."""
        ...
