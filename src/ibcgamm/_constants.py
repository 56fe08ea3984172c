"""Internal constants shared across the library."""

#: Channel version both ends must agree on during the handshake.
GAMM_VERSION = "cw-query-1"

#: Default packet lifetime in seconds (one hour).
DEFAULT_PACKET_LIFETIME = 60 * 60

NANOS_PER_SECOND = 1_000_000_000

# ------------------------------------------------------------------
# Remote query paths carried in path-form packets
# ------------------------------------------------------------------

SPOT_PRICE_PATH = "/osmosis.gamm.v1beta1.Query/SpotPrice"
ESTIMATE_SWAP_PATH = "/osmosis.gamm.v1beta1.Query/EstimateSwapExactAmountIn"
NODE_INFO_PATH = "/cosmos.base.tendermint.v1beta1.Service/GetNodeInfo"

#: Storage namespace holding per-channel accounts.
ACCOUNTS_NAMESPACE = "accounts"

UINT128_MAX = 2**128 - 1
DECIMAL_PLACES = 18
UINT64_MAX = 2**64 - 1
