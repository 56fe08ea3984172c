"""Event router tying the store, the components and the transport together."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any, NoReturn, TypeVar, assert_never

from pydantic import BaseModel, ValidationError

from ibcgamm.acknowledgment import on_packet_ack, on_packet_receive, on_packet_timeout
from ibcgamm.channel import on_channel_close, on_channel_connect, validate_channel_open
from ibcgamm.config import GammConfig
from ibcgamm.dispatch import dispatch_estimate_swap, dispatch_probe, dispatch_spot_price
from ibcgamm.envelope import JsonQueryEncoder, QueryEncoder
from ibcgamm.exceptions import DecodeError
from ibcgamm.models.channel import ChannelCloseMsg, ChannelConnectMsg, ChannelOpenMsg
from ibcgamm.models.messages import (
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
from ibcgamm.models.packet import PacketAckMsg, PacketReceiveMsg, PacketTimeoutMsg
from ibcgamm.models.response import Response
from ibcgamm.state.store import AccountStore
from ibcgamm.transport import Transport

_logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

RawMessage = str | bytes | bytearray | Mapping[str, Any]


def _parse(model: type[M], raw: M | RawMessage) -> M:
    if isinstance(raw, model):
        return raw
    try:
        if isinstance(raw, (str, bytes, bytearray)):
            return model.model_validate_json(raw)
        return model.model_validate(raw)
    except ValidationError as exc:
        raise DecodeError(f"invalid {model.__name__}: {exc}", what=model.__name__) from exc


class GammQueryModule:
    """Cross-chain query module.

    Every event runs inside a store transaction: it either commits all of
    its store writes or none of them. Outbound packets reach the transport
    only after the event committed.

    Usage::

        module = GammQueryModule(GammConfig(), transport=relayer)
        module.channel_open(open_msg)
        module.channel_connect(connect_msg)
        module.spot_price(SpotPriceMsg(channel="channel-0", pool=1, token_in="uosmo", token_out="uatom"))
    """

    def __init__(
        self,
        config: GammConfig | None = None,
        *,
        store: AccountStore | None = None,
        transport: Transport | None = None,
        clock: Callable[[], int] = time.time_ns,
        encoder: QueryEncoder | None = None,
    ) -> None:
        self._config = config or GammConfig()
        self._store = store if store is not None else AccountStore()
        self._transport = transport
        self._clock = clock
        self._encoder: QueryEncoder = encoder or JsonQueryEncoder()

    @property
    def config(self) -> GammConfig:
        return self._config

    @property
    def store(self) -> AccountStore:
        return self._store

    def _commit(self, handler: Callable[[], Response]) -> Response:
        with self._store.transaction():
            response = handler()
        if self._transport is not None:
            for packet in response.messages:
                self._transport.send_packet(packet.channel_id, packet.data, packet.timeout)
        return response

    # ------------------------------------------------------------------
    # Channel handshake
    # ------------------------------------------------------------------

    def channel_open(self, msg: ChannelOpenMsg) -> None:
        """Enforce ordering and versioning constraints."""
        validate_channel_open(
            msg.channel.order,
            msg.channel.version,
            msg.counterparty_version,
            config=self._config,
        )

    def channel_connect(self, msg: ChannelConnectMsg) -> Response:
        channel_id = msg.channel.endpoint.channel_id
        return self._commit(lambda: on_channel_connect(self._store, channel_id))

    def channel_close(self, msg: ChannelCloseMsg) -> Response:
        channel_id = msg.channel.endpoint.channel_id
        return self._commit(lambda: on_channel_close(self._store, channel_id))

    # ------------------------------------------------------------------
    # Outbound queries
    # ------------------------------------------------------------------

    def execute(self, msg: ExecuteMsg | RawMessage) -> Response:
        """Dispatch an ``ExecuteMsg`` or its JSON form."""
        parsed = _parse(ExecuteMsg, msg)
        inner = parsed.value
        match inner:
            case SpotPriceMsg():
                return self.spot_price(inner)
            case EstimateSwapMsg():
                return self.estimate_swap(inner)
            case ProbeMsg():
                return self.probe(inner)
            case _:
                assert_never(inner)

    def spot_price(self, msg: SpotPriceMsg) -> Response:
        now = self._clock()
        return self._commit(
            lambda: dispatch_spot_price(self._store, msg, now=now, config=self._config, encoder=self._encoder)
        )

    def estimate_swap(self, msg: EstimateSwapMsg) -> Response:
        now = self._clock()
        return self._commit(
            lambda: dispatch_estimate_swap(self._store, msg, now=now, config=self._config, encoder=self._encoder)
        )

    def probe(self, msg: ProbeMsg) -> Response:
        now = self._clock()
        return self._commit(lambda: dispatch_probe(self._store, msg, now=now, config=self._config))

    # ------------------------------------------------------------------
    # Packet lifecycle
    # ------------------------------------------------------------------

    def packet_ack(self, msg: PacketAckMsg, *, now: int | None = None) -> Response:
        """Apply an acknowledgment; *now* defaults to the module clock."""
        # which local channel was this packet sent from
        source_channel = msg.original_packet.src.channel_id
        stamp = self._clock() if now is None else now
        return self._commit(
            lambda: on_packet_ack(
                self._store,
                source_channel,
                msg.original_packet.data,
                msg.acknowledgement,
                now=stamp,
            )
        )

    def packet_timeout(self, msg: PacketTimeoutMsg) -> Response:
        return self._commit(lambda: on_packet_timeout(msg.packet.src.channel_id, msg.packet.data))

    def packet_receive(self, msg: PacketReceiveMsg) -> NoReturn:
        _logger.error("Unexpected inbound packet on %s", msg.packet.dest.channel_id)
        on_packet_receive(msg)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def query(self, msg: QueryMsg | RawMessage) -> AccountResponse | ListAccountsResponse:
        """Answer a ``QueryMsg`` or its JSON form."""
        parsed = _parse(QueryMsg, msg)
        inner = parsed.value
        match inner:
            case AccountQuery(channel_id=channel_id):
                return self.query_account(channel_id)
            case ListAccountsQuery(start_after=start_after):
                return self.list_accounts(start_after)
            case _:
                assert_never(inner)

    def query_account(self, channel_id: str) -> AccountResponse:
        return self._store.load(channel_id).to_response()

    def list_accounts(self, start_after: str | None = None) -> ListAccountsResponse:
        accounts = [account.to_info(channel_id) for channel_id, account in self._store.scan_ascending(start_after)]
        return ListAccountsResponse(accounts=accounts)
