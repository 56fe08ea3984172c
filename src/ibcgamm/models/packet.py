"""Packet envelopes sent over the channel and the host's packet events.

Three envelope shapes exist on the wire. All of them carry an optional
``client_id`` that is omitted from the JSON when unset:

* :class:`PacketMsg`, the path form: the remote service path plus opaque
  request bytes.
* :class:`TaggedPacketMsg`, the tagged form:
  ``{"query": {"spot_price" | "estimate_swap" | "probe": {...}}}``.
* :class:`FlatSpotPricePacket`, the flat form: a bare spot-price query.

The envelope is echoed back verbatim with every acknowledgment, which is
how the query kind of an acknowledgment is recovered.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from ibcgamm._constants import NODE_INFO_PATH, UINT64_MAX
from ibcgamm.models._base import Binary, GammBaseModel, TaggedUnion
from ibcgamm.models.channel import IbcEndpoint
from ibcgamm.models.queries import Coin


class QueryKind(StrEnum):
    """Discriminator identifying which query an envelope/ack pair belongs to."""

    SPOT_PRICE = "spot_price"
    ESTIMATE_SWAP = "estimate_swap"
    PROBE = "probe"


class PacketFormat(StrEnum):
    """Envelope shape used for outbound packets."""

    PATH = "path"
    TAGGED = "tagged"
    FLAT = "flat"


# ---------------------------------------------------------------------------
# Path form
# ---------------------------------------------------------------------------


class PacketMsg(GammBaseModel):
    """This is the message we send over the channel in the path form."""

    client_id: str | None = None
    path: str
    data: Binary


# ---------------------------------------------------------------------------
# Tagged form
# ---------------------------------------------------------------------------


class SpotPriceQuery(GammBaseModel):
    pool_id: int = Field(ge=0, le=UINT64_MAX)
    token_in: str
    token_out: str


class EstimateSwapQuery(GammBaseModel):
    sender: str
    pool_id: int = Field(ge=0, le=UINT64_MAX)
    token_in: Coin
    token_out: str


class ProbeQuery(GammBaseModel):
    path: str = NODE_INFO_PATH
    data: Binary = b""


class GammQuery(TaggedUnion):
    spot_price: SpotPriceQuery | None = None
    estimate_swap: EstimateSwapQuery | None = None
    probe: ProbeQuery | None = None


class TaggedPacketMsg(GammBaseModel):
    client_id: str | None = None
    query: GammQuery


# ---------------------------------------------------------------------------
# Flat form
# ---------------------------------------------------------------------------


class FlatSpotPricePacket(GammBaseModel):
    client_id: str | None = None
    pool_id: int = Field(ge=0, le=UINT64_MAX)
    token_in: str
    token_out: str


PacketEnvelope = PacketMsg | TaggedPacketMsg | FlatSpotPricePacket


# ---------------------------------------------------------------------------
# Host packet events
# ---------------------------------------------------------------------------


class IbcPacket(GammBaseModel):
    """A packet as committed by the transport: our envelope plus routing."""

    data: Binary
    src: IbcEndpoint
    dest: IbcEndpoint
    sequence: int = Field(ge=0)
    timeout: int = Field(ge=0, description="Absolute deadline in nanoseconds")


class PacketAckMsg(GammBaseModel):
    acknowledgement: Binary
    original_packet: IbcPacket


class PacketTimeoutMsg(GammBaseModel):
    packet: IbcPacket


class PacketReceiveMsg(GammBaseModel):
    packet: IbcPacket
