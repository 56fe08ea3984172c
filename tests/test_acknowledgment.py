from __future__ import annotations

from decimal import Decimal

import pytest

from ibcgamm.acknowledgment import on_packet_ack, on_packet_receive, on_packet_timeout
from ibcgamm.exceptions import DecodeError, NoAccountToUpdateError, UnsupportedInboundPacketError
from ibcgamm.models.ack import AckResult, EstimateSwapAck, ProbeAck, SpotPriceAck, ack_fail, ack_success
from ibcgamm.models.packet import (
    FlatSpotPricePacket,
    GammQuery,
    PacketMsg,
    ProbeQuery,
    SpotPriceQuery,
    TaggedPacketMsg,
)
from ibcgamm.state.store import Account, AccountStore

T = 1_700_000_123_000_000_000

SPOT_PRICE_PACKET = PacketMsg(path="/osmosis.gamm.v1beta1.Query/SpotPrice", data=b"{}").to_bytes()
ESTIMATE_SWAP_PACKET = PacketMsg(path="/osmosis.gamm.v1beta1.Query/EstimateSwapExactAmountIn", data=b"{}").to_bytes()
PROBE_PACKET = PacketMsg(path="/cosmos.base.tendermint.v1beta1.Service/GetNodeInfo", data=b"").to_bytes()


def _store_with(channel_id: str = "channel-1", account: Account | None = None) -> AccountStore:
    store = AccountStore()
    store.save(channel_id, account or Account())
    return store


def test_spot_price_result_updates_price_and_time() -> None:
    store = _store_with(account=Account(remote_swap_amount="77", remote_balance="3"))
    ack = ack_success(SpotPriceAck(price=Decimal("1.50"))).to_bytes()

    response = on_packet_ack(store, "channel-1", SPOT_PRICE_PACKET, ack, now=T)

    assert store.load("channel-1") == Account(
        last_update_time=T,
        remote_spot_price="1.50",
        remote_swap_amount="77",
        remote_balance="3",
    )
    assert response.attribute("action") == "receive_spot_price"
    assert response.attribute("price") == "1.50"


def test_estimate_swap_result_updates_only_swap_amount() -> None:
    store = _store_with(account=Account(remote_spot_price="1.50"))
    ack = ack_success(EstimateSwapAck(amount=12345)).to_bytes()

    response = on_packet_ack(store, "channel-1", ESTIMATE_SWAP_PACKET, ack, now=T)

    assert store.load("channel-1") == Account(last_update_time=T, remote_spot_price="1.50", remote_swap_amount="12345")
    assert response.attribute("action") == "receive_estimate_swap"
    assert response.attribute("amount") == "12345"


def test_probe_result_updates_balance_and_address() -> None:
    store = _store_with()
    ack = ack_success(ProbeAck(balance=10, address="osmo1remote")).to_bytes()

    response = on_packet_ack(store, "channel-1", PROBE_PACKET, ack, now=T)

    account = store.load("channel-1")
    assert account.remote_balance == "10"
    assert account.remote_address == "osmo1remote"
    assert response.attribute("balance") == "10"


def test_probe_result_without_address_stores_empty_address() -> None:
    store = _store_with(account=Account(remote_address="osmo1old"))
    ack = AckResult(result=b'{"balance": "4"}').to_bytes()

    on_packet_ack(store, "channel-1", PROBE_PACKET, ack, now=T)

    assert store.load("channel-1").remote_address == ""


def test_unknown_path_is_treated_as_probe() -> None:
    store = _store_with()
    original = PacketMsg(path="/cosmos.bank.v1beta1.Query/Balance", data=b"\x01").to_bytes()
    ack = ack_success(ProbeAck(balance=1)).to_bytes()

    response = on_packet_ack(store, "channel-1", original, ack, now=T)

    assert response.attribute("action") == "receive_probe"


def test_result_payload_extra_fields_are_ignored() -> None:
    store = _store_with()
    ack = AckResult(result=b'{"price": "2.25", "pool_id": 1}').to_bytes()

    on_packet_ack(store, "channel-1", SPOT_PRICE_PACKET, ack, now=T)

    assert store.load("channel-1").remote_spot_price == "2.25"


@pytest.mark.parametrize(
    "original",
    [
        TaggedPacketMsg(
            query=GammQuery(spot_price=SpotPriceQuery(pool_id=1, token_in="uosmo", token_out="uatom"))
        ).to_bytes(),
        FlatSpotPricePacket(client_id="abc", pool_id=1, token_in="uosmo", token_out="uatom").to_bytes(),
    ],
    ids=["tagged", "flat"],
)
def test_kind_recovered_from_every_envelope_shape(original: bytes) -> None:
    store = _store_with()
    ack = ack_success(SpotPriceAck(price=Decimal("0.75"))).to_bytes()

    on_packet_ack(store, "channel-1", original, ack, now=T)

    assert store.load("channel-1").remote_spot_price == "0.75"


def test_tagged_probe_envelope_is_probe() -> None:
    store = _store_with()
    original = TaggedPacketMsg(query=GammQuery(probe=ProbeQuery())).to_bytes()

    on_packet_ack(store, "channel-1", original, ack_success(ProbeAck(balance=8)).to_bytes(), now=T)

    assert store.load("channel-1").remote_balance == "8"


def test_error_ack_leaves_account_byte_identical() -> None:
    account = Account(last_update_time=5, remote_spot_price="1.50")
    store = _store_with(account=account)
    before = account.to_bytes()

    response = on_packet_ack(store, "channel-1", SPOT_PRICE_PACKET, ack_fail("timeout").to_bytes(), now=T)

    assert store.load("channel-1").to_bytes() == before
    assert response.attribute("action") == "receive_spot_price"
    assert response.attribute("error") == "timeout"


def test_error_ack_after_close_is_absorbed() -> None:
    store = AccountStore()

    response = on_packet_ack(store, "channel-gone", SPOT_PRICE_PACKET, ack_fail("boom").to_bytes(), now=T)

    assert response.attribute("error") == "boom"
    assert not store.exists("channel-gone")


def test_result_ack_without_account_raises() -> None:
    store = AccountStore()
    ack = ack_success(SpotPriceAck(price=Decimal("1"))).to_bytes()

    with pytest.raises(NoAccountToUpdateError) as exc_info:
        on_packet_ack(store, "channel-gone", SPOT_PRICE_PACKET, ack, now=T)

    assert exc_info.value.channel_id == "channel-gone"
    assert not store.exists("channel-gone")


class TestDecodeFailures:
    @pytest.mark.parametrize(
        "original",
        [b"not json", b"[1, 2]", b'{"unknown": 1}', b'{"path": "/x", "data": "***"}'],
        ids=["not-json", "not-object", "unknown-shape", "bad-base64"],
    )
    def test_bad_original_envelope(self, original: bytes) -> None:
        store = _store_with()
        ack = ack_success(SpotPriceAck(price=Decimal("1"))).to_bytes()

        with pytest.raises(DecodeError):
            on_packet_ack(store, "channel-1", original, ack, now=T)

        assert store.load("channel-1") == Account()

    @pytest.mark.parametrize(
        "ack",
        [b"garbage", b"{}", b'{"result": "", "error": "x"}', b'{"ok": true}'],
        ids=["not-json", "empty", "both-variants", "unknown-variant"],
    )
    def test_bad_ack_envelope(self, ack: bytes) -> None:
        store = _store_with()

        with pytest.raises(DecodeError) as exc_info:
            on_packet_ack(store, "channel-1", SPOT_PRICE_PACKET, ack, now=T)

        assert exc_info.value.what == "ack"
        assert store.load("channel-1") == Account()

    def test_result_payload_not_matching_kind_is_fatal(self) -> None:
        store = _store_with()
        ack = ack_success(EstimateSwapAck(amount=5)).to_bytes()

        with pytest.raises(DecodeError) as exc_info:
            on_packet_ack(store, "channel-1", SPOT_PRICE_PACKET, ack, now=T)

        assert exc_info.value.what == "result"
        assert store.load("channel-1") == Account()

    @pytest.mark.parametrize(
        "price",
        ["-3.5", "1e100000", "0.0000000000000000001"],
        ids=["negative", "exponent", "too-precise"],
    )
    def test_malformed_spot_price_is_fatal(self, price: str) -> None:
        store = _store_with(account=Account(last_update_time=5, remote_spot_price="1.50"))
        ack = AckResult(result=f'{{"price": "{price}"}}'.encode()).to_bytes()

        with pytest.raises(DecodeError) as exc_info:
            on_packet_ack(store, "channel-1", SPOT_PRICE_PACKET, ack, now=T)

        assert exc_info.value.what == "result"
        assert store.load("channel-1") == Account(last_update_time=5, remote_spot_price="1.50")


def test_timeout_records_attribute_without_mutation() -> None:
    store = _store_with(account=Account(remote_spot_price="1.50"))

    response = on_packet_timeout("channel-1", SPOT_PRICE_PACKET)

    assert response.attribute("action") == "ibc_packet_timeout"
    assert response.attribute("query") == "spot_price"
    assert response.messages == ()
    assert store.load("channel-1") == Account(remote_spot_price="1.50")


@pytest.mark.parametrize("original", [b"not json", b'{"unknown": 1}'], ids=["not-json", "unknown-shape"])
def test_timeout_with_unreadable_envelope_is_still_recorded(original: bytes) -> None:
    store = _store_with(account=Account(remote_spot_price="1.50"))

    response = on_packet_timeout("channel-1", original)

    assert response.attribute("action") == "ibc_packet_timeout"
    assert response.attribute("channel_id") == "channel-1"
    assert response.attribute("query") == "unknown"
    assert store.load("channel-1") == Account(remote_spot_price="1.50")


def test_inbound_packet_is_unsupported() -> None:
    with pytest.raises(UnsupportedInboundPacketError):
        on_packet_receive(b"anything")
