"""ibcgamm - cross-chain pool queries over an unordered packet channel."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ibcgamm")
except PackageNotFoundError:
    __version__ = "0+local"
from ibcgamm.config import GammConfig
from ibcgamm.envelope import JsonQueryEncoder, QueryEncoder
from ibcgamm.exceptions import (
    AccountNotFoundError,
    ChannelNotFoundError,
    DecodeError,
    GammConfigError,
    GammError,
    HandshakeError,
    NoAccountToUpdateError,
    OrderMismatchError,
    UnsupportedInboundPacketError,
    VersionMismatchError,
)
from ibcgamm.models import (
    AccountResponse,
    AckError,
    AckResult,
    Coin,
    EstimateSwapMsg,
    ExecuteMsg,
    IbcOrder,
    ListAccountsResponse,
    PacketFormat,
    ProbeMsg,
    QueryKind,
    QueryMsg,
    Response,
    SendPacket,
    SpotPriceMsg,
)
from ibcgamm.module import GammQueryModule
from ibcgamm.state.store import Account, AccountStore, MemoryStorage, Storage
from ibcgamm.transport import Transport

__all__ = [
    "__version__",
    "Account",
    "AccountNotFoundError",
    "AccountResponse",
    "AccountStore",
    "AckError",
    "AckResult",
    "ChannelNotFoundError",
    "Coin",
    "DecodeError",
    "EstimateSwapMsg",
    "ExecuteMsg",
    "GammConfig",
    "GammConfigError",
    "GammError",
    "GammQueryModule",
    "HandshakeError",
    "IbcOrder",
    "JsonQueryEncoder",
    "ListAccountsResponse",
    "MemoryStorage",
    "NoAccountToUpdateError",
    "OrderMismatchError",
    "PacketFormat",
    "ProbeMsg",
    "QueryEncoder",
    "QueryKind",
    "QueryMsg",
    "Response",
    "SendPacket",
    "SpotPriceMsg",
    "Storage",
    "Transport",
    "UnsupportedInboundPacketError",
    "VersionMismatchError",
]
