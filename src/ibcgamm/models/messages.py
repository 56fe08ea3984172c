"""Caller-facing execute/query messages and their responses."""

from __future__ import annotations

from pydantic import Field

from ibcgamm._constants import NODE_INFO_PATH, UINT64_MAX
from ibcgamm.models._base import Binary, GammBaseModel, TaggedUnion
from ibcgamm.models.queries import Coin

# ---------------------------------------------------------------------------
# Execute
# ---------------------------------------------------------------------------


class SpotPriceMsg(GammBaseModel):
    """Ask the counterparty for a pool's spot price."""

    channel: str
    pool: int = Field(ge=0, le=UINT64_MAX)
    token_in: str
    token_out: str
    timeout: int | None = Field(
        default=None,
        ge=0,
        description="How long the packet lives in seconds. If not specified, use the configured default.",
    )
    client_id: str | None = None


class EstimateSwapMsg(GammBaseModel):
    """Ask the counterparty how much ``token_out`` a swap of ``amount`` would yield."""

    channel: str
    pool: int = Field(ge=0, le=UINT64_MAX)
    sender: str
    amount: Coin
    token_out: str
    timeout: int | None = Field(default=None, ge=0)
    client_id: str | None = None


class ProbeMsg(GammBaseModel):
    """Send a raw query to an arbitrary remote service path."""

    channel: str
    path: str = NODE_INFO_PATH
    data: Binary = b""
    timeout: int | None = Field(default=None, ge=0)
    client_id: str | None = None


class ExecuteMsg(TaggedUnion):
    spot_price: SpotPriceMsg | None = None
    estimate_swap: EstimateSwapMsg | None = None
    probe: ProbeMsg | None = None


# ---------------------------------------------------------------------------
# Query
# ---------------------------------------------------------------------------


class AccountQuery(GammBaseModel):
    channel_id: str


class ListAccountsQuery(GammBaseModel):
    start_after: str | None = None


class QueryMsg(TaggedUnion):
    # Get account for one channel
    account: AccountQuery | None = None
    # Shows all open accounts (incl. remote info)
    list_accounts: ListAccountsQuery | None = None


class AccountResponse(GammBaseModel):
    last_update_time: int
    remote_spot_price: str
    remote_swap_amount: str
    remote_balance: str
    remote_address: str


class AccountInfo(AccountResponse):
    channel_id: str


class ListAccountsResponse(GammBaseModel):
    accounts: list[AccountInfo]
