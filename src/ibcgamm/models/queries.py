"""Remote query requests carried inside path-form packets.

These mirror the request messages of the remote chain's gamm query service.
How they become bytes is up to the :class:`ibcgamm.envelope.QueryEncoder`
in use.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from ibcgamm._constants import ESTIMATE_SWAP_PATH, SPOT_PRICE_PATH, UINT64_MAX
from ibcgamm.models._base import GammBaseModel, Uint128


class Coin(GammBaseModel):
    denom: str = Field(min_length=1)
    amount: Uint128

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


class QueryRequest(GammBaseModel):
    """Base for remote query requests; ``PATH`` names the remote service method."""

    PATH: ClassVar[str]


class SpotPriceRequest(QueryRequest):
    PATH: ClassVar[str] = SPOT_PRICE_PATH

    pool_id: int = Field(ge=0, le=UINT64_MAX)
    token_in_denom: str
    token_out_denom: str
    with_swap_fee: bool = False


class SwapAmountInRoute(GammBaseModel):
    pool_id: int = Field(ge=0, le=UINT64_MAX)
    token_out_denom: str


class EstimateSwapRequest(QueryRequest):
    PATH: ClassVar[str] = ESTIMATE_SWAP_PATH

    sender: str
    pool_id: int = Field(ge=0, le=UINT64_MAX)
    token_in: str
    routes: list[SwapAmountInRoute]
