"""Acknowledgment envelope and the per-query result payloads.

:data:`PacketAck` is a closed two-variant union. Handlers match on it
exhaustively::

    match ack:
        case AckResult(result=data):
            ...
        case AckError(error=message):
            ...
        case _:
            assert_never(ack)
"""

from __future__ import annotations

from pydantic import ConfigDict, TypeAdapter

from ibcgamm.models._base import Binary, GammBaseModel, UDecimal, Uint128


class AckResult(GammBaseModel):
    """Successful remote query; ``result`` holds the query-specific payload."""

    result: Binary


class AckError(GammBaseModel):
    """Failed remote query with a human readable reason."""

    error: str


PacketAck = AckResult | AckError

PACKET_ACK_ADAPTER: TypeAdapter[PacketAck] = TypeAdapter(PacketAck)


def ack_success(payload: GammBaseModel) -> AckResult:
    """Wrap a result payload the way the counterparty does."""
    return AckResult(result=payload.to_bytes())


def ack_fail(message: str) -> AckError:
    return AckError(error=message)


# ---------------------------------------------------------------------------
# Result payloads
# ---------------------------------------------------------------------------


class _ResultPayload(GammBaseModel):
    # Remote services may grow new response fields.
    model_config = ConfigDict(extra="ignore")


class SpotPriceAck(_ResultPayload):
    price: UDecimal


class EstimateSwapAck(_ResultPayload):
    amount: Uint128


class ProbeAck(_ResultPayload):
    balance: Uint128
    address: str | None = None
