"""Wire models for ibcgamm."""

from ibcgamm.models.ack import (
    AckError,
    AckResult,
    EstimateSwapAck,
    PacketAck,
    ProbeAck,
    SpotPriceAck,
    ack_fail,
    ack_success,
)
from ibcgamm.models.channel import (
    ChannelCloseMsg,
    ChannelConnectMsg,
    ChannelOpenMsg,
    IbcChannel,
    IbcEndpoint,
    IbcOrder,
)
from ibcgamm.models.messages import (
    AccountInfo,
    AccountQuery,
    AccountResponse,
    EstimateSwapMsg,
    ExecuteMsg,
    ListAccountsQuery,
    ListAccountsResponse,
    ProbeMsg,
    QueryMsg,
    SpotPriceMsg,
)
from ibcgamm.models.packet import (
    FlatSpotPricePacket,
    GammQuery,
    IbcPacket,
    PacketAckMsg,
    PacketEnvelope,
    PacketFormat,
    PacketMsg,
    PacketReceiveMsg,
    PacketTimeoutMsg,
    QueryKind,
    TaggedPacketMsg,
)
from ibcgamm.models.queries import Coin
from ibcgamm.models.response import Attribute, Response, SendPacket

__all__ = [
    "AccountInfo",
    "AccountQuery",
    "AccountResponse",
    "AckError",
    "AckResult",
    "Attribute",
    "ChannelCloseMsg",
    "ChannelConnectMsg",
    "ChannelOpenMsg",
    "Coin",
    "EstimateSwapAck",
    "EstimateSwapMsg",
    "ExecuteMsg",
    "FlatSpotPricePacket",
    "GammQuery",
    "IbcChannel",
    "IbcEndpoint",
    "IbcOrder",
    "IbcPacket",
    "ListAccountsQuery",
    "ListAccountsResponse",
    "PacketAck",
    "PacketAckMsg",
    "PacketEnvelope",
    "PacketFormat",
    "PacketMsg",
    "PacketReceiveMsg",
    "PacketTimeoutMsg",
    "ProbeAck",
    "ProbeMsg",
    "QueryKind",
    "QueryMsg",
    "Response",
    "SendPacket",
    "SpotPriceAck",
    "SpotPriceMsg",
    "TaggedPacketMsg",
    "ack_fail",
    "ack_success",
]
