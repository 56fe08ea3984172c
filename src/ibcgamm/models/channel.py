"""Channel handshake events delivered by the host."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from ibcgamm.models._base import GammBaseModel


class IbcOrder(StrEnum):
    """Channel ordering, in the host chain's wire spelling."""

    UNORDERED = "ORDER_UNORDERED"
    ORDERED = "ORDER_ORDERED"


class IbcEndpoint(GammBaseModel):
    port_id: str
    channel_id: str


class IbcChannel(GammBaseModel):
    """A channel as seen from the local end during the handshake."""

    endpoint: IbcEndpoint
    counterparty_endpoint: IbcEndpoint
    order: IbcOrder
    version: str
    connection_id: str = Field(default="connection-0")


class ChannelOpenMsg(GammBaseModel):
    """OpenInit (no counterparty version yet) or OpenTry (counterparty version known)."""

    channel: IbcChannel
    counterparty_version: str | None = None


class ChannelConnectMsg(GammBaseModel):
    """OpenAck or OpenConfirm: the channel is now established."""

    channel: IbcChannel
    counterparty_version: str | None = None


class ChannelCloseMsg(GammBaseModel):
    channel: IbcChannel
