"""Outbound query dispatch.

Each function checks that the target channel has an account, resolves the
packet deadline and returns a :class:`Response` with exactly one
:class:`SendPacket`. Dispatch never writes to the store; the account keeps
reflecting the last applied acknowledgment.
"""

from __future__ import annotations

import logging

from ibcgamm._constants import NANOS_PER_SECOND
from ibcgamm.config import GammConfig
from ibcgamm.envelope import JsonQueryEncoder, QueryEncoder, encode_packet
from ibcgamm.exceptions import ChannelNotFoundError, GammConfigError
from ibcgamm.models.messages import EstimateSwapMsg, ProbeMsg, SpotPriceMsg
from ibcgamm.models.packet import (
    EstimateSwapQuery,
    FlatSpotPricePacket,
    GammQuery,
    PacketEnvelope,
    PacketFormat,
    PacketMsg,
    ProbeQuery,
    QueryKind,
    SpotPriceQuery,
    TaggedPacketMsg,
)
from ibcgamm.models.queries import EstimateSwapRequest, SpotPriceRequest, SwapAmountInRoute
from ibcgamm.models.response import Response, SendPacket
from ibcgamm.state.store import AccountStore

_logger = logging.getLogger(__name__)

_DEFAULT_ENCODER = JsonQueryEncoder()


def _ensure_channel(store: AccountStore, channel_id: str) -> None:
    # ensure the channel exists (not found if not registered)
    if not store.exists(channel_id):
        raise ChannelNotFoundError(channel_id=channel_id)


def resolve_deadline(now: int, timeout: int | None, config: GammConfig) -> int:
    """Absolute deadline in nanoseconds.

    *timeout* is a delta in seconds from the caller; ``None`` falls back to
    the configured packet lifetime.
    """
    delta = config.packet_lifetime if timeout is None else timeout
    return now + delta * NANOS_PER_SECOND


def _send(channel_id: str, envelope: PacketEnvelope, deadline: int, kind: QueryKind) -> Response:
    packet = SendPacket(channel_id=channel_id, data=encode_packet(envelope), timeout=deadline)
    _logger.debug("Dispatching %s on %s (deadline %d)", kind, channel_id, deadline)
    return Response().add_message(packet).add_attribute("action", kind)


def dispatch_spot_price(
    store: AccountStore,
    msg: SpotPriceMsg,
    *,
    now: int,
    config: GammConfig,
    encoder: QueryEncoder = _DEFAULT_ENCODER,
) -> Response:
    _ensure_channel(store, msg.channel)
    deadline = resolve_deadline(now, msg.timeout, config)

    envelope: PacketEnvelope
    match config.packet_format:
        case PacketFormat.PATH:
            request = SpotPriceRequest(
                pool_id=msg.pool,
                token_in_denom=msg.token_in,
                token_out_denom=msg.token_out,
                with_swap_fee=False,
            )
            envelope = PacketMsg(client_id=msg.client_id, path=request.PATH, data=encoder.encode(request))
        case PacketFormat.TAGGED:
            query = SpotPriceQuery(pool_id=msg.pool, token_in=msg.token_in, token_out=msg.token_out)
            envelope = TaggedPacketMsg(client_id=msg.client_id, query=GammQuery(spot_price=query))
        case PacketFormat.FLAT:
            envelope = FlatSpotPricePacket(
                client_id=msg.client_id,
                pool_id=msg.pool,
                token_in=msg.token_in,
                token_out=msg.token_out,
            )

    return _send(msg.channel, envelope, deadline, QueryKind.SPOT_PRICE)


def dispatch_estimate_swap(
    store: AccountStore,
    msg: EstimateSwapMsg,
    *,
    now: int,
    config: GammConfig,
    encoder: QueryEncoder = _DEFAULT_ENCODER,
) -> Response:
    _ensure_channel(store, msg.channel)
    deadline = resolve_deadline(now, msg.timeout, config)

    envelope: PacketEnvelope
    match config.packet_format:
        case PacketFormat.PATH:
            request = EstimateSwapRequest(
                sender=msg.sender,
                pool_id=msg.pool,
                token_in=str(msg.amount),
                routes=[SwapAmountInRoute(pool_id=msg.pool, token_out_denom=msg.token_out)],
            )
            envelope = PacketMsg(client_id=msg.client_id, path=request.PATH, data=encoder.encode(request))
        case PacketFormat.TAGGED:
            query = EstimateSwapQuery(
                sender=msg.sender,
                pool_id=msg.pool,
                token_in=msg.amount,
                token_out=msg.token_out,
            )
            envelope = TaggedPacketMsg(client_id=msg.client_id, query=GammQuery(estimate_swap=query))
        case PacketFormat.FLAT:
            raise GammConfigError("flat packet format only carries spot price queries")

    return _send(msg.channel, envelope, deadline, QueryKind.ESTIMATE_SWAP)


def dispatch_probe(
    store: AccountStore,
    msg: ProbeMsg,
    *,
    now: int,
    config: GammConfig,
) -> Response:
    """Send raw bytes to an arbitrary remote path (node info by default)."""
    _ensure_channel(store, msg.channel)
    deadline = resolve_deadline(now, msg.timeout, config)

    envelope: PacketEnvelope
    match config.packet_format:
        case PacketFormat.PATH:
            envelope = PacketMsg(client_id=msg.client_id, path=msg.path, data=msg.data)
        case PacketFormat.TAGGED:
            query = ProbeQuery(path=msg.path, data=msg.data)
            envelope = TaggedPacketMsg(client_id=msg.client_id, query=GammQuery(probe=query))
        case PacketFormat.FLAT:
            raise GammConfigError("flat packet format only carries spot price queries")

    return _send(msg.channel, envelope, deadline, QueryKind.PROBE)
