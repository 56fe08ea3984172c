"""Acknowledgment and timeout handling.

The query kind of an acknowledgment is recovered from the original
envelope echoed back by the transport; the kind selects the schema of the
result payload and the account fields it overwrites.

Policy:

* ``error`` acks are recorded as an attribute and leave the account
  untouched, so one failed remote query never destroys known-good state.
* ``result`` acks that fail to decode abort the event (:class:`DecodeError`).
* ``result`` acks for a channel without an account abort the event
  (:class:`NoAccountToUpdateError`).
* timeouts are recorded only; requests are never retried. A timeout whose
  echoed envelope cannot be read is still recorded, with query ``unknown``.
"""

from __future__ import annotations

import logging
from typing import Any, NoReturn, assert_never

from ibcgamm.envelope import ResultPayload, decode_ack, decode_packet, decode_result, query_kind
from ibcgamm.exceptions import DecodeError, NoAccountToUpdateError, UnsupportedInboundPacketError
from ibcgamm.models.ack import AckError, AckResult, EstimateSwapAck, ProbeAck, SpotPriceAck
from ibcgamm.models.response import Response
from ibcgamm.state.store import Account, AccountStore

_logger = logging.getLogger(__name__)


def _result_fields(result: ResultPayload) -> dict[str, str]:
    """Account fields written by a result, keyed by field name."""
    match result:
        case SpotPriceAck(price=price):
            return {"remote_spot_price": format(price, "f")}
        case EstimateSwapAck(amount=amount):
            return {"remote_swap_amount": str(amount)}
        case ProbeAck(balance=balance, address=address):
            return {"remote_balance": str(balance), "remote_address": address or ""}
        case _:
            assert_never(result)


def _value_attribute(result: ResultPayload, fields: dict[str, str]) -> tuple[str, str]:
    match result:
        case SpotPriceAck():
            return "price", fields["remote_spot_price"]
        case EstimateSwapAck():
            return "amount", fields["remote_swap_amount"]
        case ProbeAck():
            return "balance", fields["remote_balance"]
        case _:
            assert_never(result)


def on_packet_ack(
    store: AccountStore,
    source_channel: str,
    original_data: bytes,
    ack_data: bytes,
    *,
    now: int,
) -> Response:
    """Apply an acknowledgment for a packet sent from *source_channel*.

    *now* stamps ``last_update_time`` (nanoseconds).
    """
    # we need to parse the ack based on our request
    kind = query_kind(decode_packet(original_data))
    ack = decode_ack(ack_data)
    action = f"receive_{kind}"

    match ack:
        case AckError(error=message):
            _logger.warning("Remote %s query on %s failed: %s", kind, source_channel, message)
            return Response().add_attribute("action", action).add_attribute("error", message)
        case AckResult(result=data):
            result = decode_result(kind, data)
        case _:
            assert_never(ack)

    fields = _result_fields(result)

    def _apply(orig: Account | None) -> Account:
        if orig is None:
            raise NoAccountToUpdateError(channel_id=source_channel)
        return orig.model_copy(update={"last_update_time": now, **fields})

    store.update(source_channel, _apply)
    _logger.debug("Applied %s result on %s: %s", kind, source_channel, fields)

    key, value = _value_attribute(result, fields)
    return Response().add_attribute("action", action).add_attribute(key, value)


def on_packet_timeout(source_channel: str, original_data: bytes) -> Response:
    """Record that a query expired; the account is left as it was."""
    try:
        kind: str = query_kind(decode_packet(original_data))
    except DecodeError as exc:
        _logger.warning("Timed out packet on %s has an unreadable envelope: %s", source_channel, exc)
        kind = "unknown"
    _logger.info("%s query on %s timed out", kind, source_channel)
    return (
        Response()
        .add_attribute("action", "ibc_packet_timeout")
        .add_attribute("channel_id", source_channel)
        .add_attribute("query", kind)
    )


def on_packet_receive(*_args: Any, **_kwargs: Any) -> NoReturn:
    """Never should be called as the other side never sends request packets."""
    raise UnsupportedInboundPacketError("this module only sends queries; inbound packets are not supported")
