"""Custom exception hierarchy for ibcgamm."""

from __future__ import annotations


class GammError(Exception):
    """Base exception for all ibcgamm errors."""


class GammConfigError(GammError):
    """Invalid or missing configuration."""


class HandshakeError(GammError):
    """Channel handshake rejected; the channel must not be established."""


class VersionMismatchError(HandshakeError):
    """Channel or counterparty version differs from the configured version."""

    def __init__(self, message: str, *, expected: str = "", actual: str = "") -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message)


class OrderMismatchError(HandshakeError):
    """Channel ordering differs from the configured ordering."""

    def __init__(self, message: str, *, expected: str = "", actual: str = "") -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message)


class ChannelNotFoundError(GammError):
    """No account is registered for the channel a query was addressed to."""

    def __init__(self, message: str = "Channel not found", *, channel_id: str = "") -> None:
        self.channel_id = channel_id
        super().__init__(message)


class AccountNotFoundError(GammError):
    """No account is stored for the requested channel."""

    def __init__(self, message: str, *, channel_id: str = "") -> None:
        self.channel_id = channel_id
        super().__init__(message)


class DecodeError(GammError):
    """A packet, acknowledgment or stored record could not be decoded."""

    def __init__(self, message: str, *, what: str = "") -> None:
        self.what = what
        super().__init__(message)


class NoAccountToUpdateError(GammError):
    """A result acknowledgment arrived for a channel without an account.

    An account must exist before any packet can be sent on a channel, so
    this is an invariant violation and aborts the acknowledgment event.
    """

    def __init__(self, message: str = "no account to update", *, channel_id: str = "") -> None:
        self.channel_id = channel_id
        super().__init__(message)


class UnsupportedInboundPacketError(GammError):
    """The counterparty sent a request packet.

    This side only queries and the other side only answers, so an inbound
    request can never be handled.
    """
