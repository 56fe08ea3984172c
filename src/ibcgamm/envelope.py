"""Packet envelope and acknowledgment codec.

Ack handling never looks anything up in a pending-request table. The
query kind is recovered from the original envelope, which the transport
echoes back verbatim alongside the acknowledgment.

Query parameters for path-form packets are turned into bytes by a
:class:`QueryEncoder`. The remote chain's native encoding is an external
concern; :class:`JsonQueryEncoder` is the default.
"""

from __future__ import annotations

import json
from typing import Protocol, assert_never

from pydantic import ValidationError

from ibcgamm._constants import ESTIMATE_SWAP_PATH, SPOT_PRICE_PATH
from ibcgamm.exceptions import DecodeError
from ibcgamm.models.ack import PACKET_ACK_ADAPTER, EstimateSwapAck, PacketAck, ProbeAck, SpotPriceAck
from ibcgamm.models.packet import (
    FlatSpotPricePacket,
    PacketEnvelope,
    PacketMsg,
    QueryKind,
    TaggedPacketMsg,
)
from ibcgamm.models.queries import QueryRequest

_PATH_KINDS: dict[str, QueryKind] = {
    SPOT_PRICE_PATH: QueryKind.SPOT_PRICE,
    ESTIMATE_SWAP_PATH: QueryKind.ESTIMATE_SWAP,
}

ResultPayload = SpotPriceAck | EstimateSwapAck | ProbeAck

_RESULT_SCHEMAS: dict[QueryKind, type[ResultPayload]] = {
    QueryKind.SPOT_PRICE: SpotPriceAck,
    QueryKind.ESTIMATE_SWAP: EstimateSwapAck,
    QueryKind.PROBE: ProbeAck,
}


class QueryEncoder(Protocol):
    """Turns a remote query request into the bytes carried by ``PacketMsg.data``."""

    def encode(self, request: QueryRequest) -> bytes: ...


class JsonQueryEncoder:
    """Compact JSON of the request model."""

    def encode(self, request: QueryRequest) -> bytes:
        return request.to_bytes()


def encode_packet(envelope: PacketEnvelope) -> bytes:
    return envelope.to_bytes()


def decode_packet(data: bytes) -> PacketEnvelope:
    """Decode any of the three envelope shapes."""
    try:
        obj = json.loads(data)
    except ValueError as exc:
        raise DecodeError(f"packet is not JSON: {exc}", what="packet") from exc
    if not isinstance(obj, dict):
        raise DecodeError(f"packet must be a JSON object, got {type(obj).__name__}", what="packet")

    model: type[PacketMsg] | type[TaggedPacketMsg] | type[FlatSpotPricePacket]
    if "path" in obj:
        model = PacketMsg
    elif "query" in obj:
        model = TaggedPacketMsg
    elif "pool_id" in obj:
        model = FlatSpotPricePacket
    else:
        raise DecodeError(f"unrecognized packet envelope keys: {sorted(obj)}", what="packet")

    try:
        return model.model_validate(obj)
    except ValidationError as exc:
        raise DecodeError(f"invalid {model.__name__}: {exc}", what="packet") from exc


def query_kind(envelope: PacketEnvelope) -> QueryKind:
    """Recover which query an envelope carries.

    Path-form packets for paths other than the two gamm queries are probes.
    """
    match envelope:
        case PacketMsg(path=path):
            return _PATH_KINDS.get(path, QueryKind.PROBE)
        case TaggedPacketMsg(query=query):
            return QueryKind(query.tag)
        case FlatSpotPricePacket():
            return QueryKind.SPOT_PRICE
        case _:
            assert_never(envelope)


def decode_ack(data: bytes) -> PacketAck:
    try:
        return PACKET_ACK_ADAPTER.validate_json(data)
    except ValidationError as exc:
        raise DecodeError(f"invalid acknowledgement: {exc}", what="ack") from exc


def decode_result(kind: QueryKind, data: bytes) -> ResultPayload:
    """Decode a result payload with the schema implied by *kind*."""
    schema = _RESULT_SCHEMAS[kind]
    try:
        return schema.model_validate_json(data)
    except ValidationError as exc:
        raise DecodeError(f"invalid {kind} result: {exc}", what="result") from exc
