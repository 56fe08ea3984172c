from __future__ import annotations

import pytest

from ibcgamm.channel import on_channel_close, on_channel_connect, validate_channel_open
from ibcgamm.config import GammConfig
from ibcgamm.exceptions import HandshakeError, OrderMismatchError, VersionMismatchError
from ibcgamm.models.channel import IbcOrder
from ibcgamm.state.store import Account, AccountStore

GAMM_VERSION = "cw-query-1"


class TestValidateChannelOpen:
    def test_accepts_configured_order_and_version(self) -> None:
        validate_channel_open(IbcOrder.UNORDERED, GAMM_VERSION, config=GammConfig())

    def test_accepts_matching_counterparty_version(self) -> None:
        validate_channel_open(IbcOrder.UNORDERED, GAMM_VERSION, GAMM_VERSION, config=GammConfig())

    def test_rejects_wrong_order(self) -> None:
        with pytest.raises(OrderMismatchError, match="Only supports unordered channels"):
            validate_channel_open(IbcOrder.ORDERED, GAMM_VERSION, config=GammConfig())

    def test_rejects_wrong_version(self) -> None:
        with pytest.raises(VersionMismatchError, match="Must set version to `cw-query-1`") as exc_info:
            validate_channel_open(IbcOrder.UNORDERED, "reflect", config=GammConfig())

        assert exc_info.value.actual == "reflect"
        assert exc_info.value.expected == GAMM_VERSION

    def test_rejects_wrong_counterparty_version(self) -> None:
        with pytest.raises(VersionMismatchError, match="Counterparty version must be `cw-query-1`"):
            validate_channel_open(IbcOrder.UNORDERED, GAMM_VERSION, "cw-query-2", config=GammConfig())

    def test_order_is_checked_before_version(self) -> None:
        with pytest.raises(OrderMismatchError):
            validate_channel_open(IbcOrder.ORDERED, "reflect", "reflect", config=GammConfig())

    def test_follows_configured_constants(self) -> None:
        config = GammConfig(version="custom-1", ordering=IbcOrder.ORDERED)

        validate_channel_open(IbcOrder.ORDERED, "custom-1", "custom-1", config=config)
        with pytest.raises(OrderMismatchError, match="Only supports ordered channels"):
            validate_channel_open(IbcOrder.UNORDERED, "custom-1", config=config)
        with pytest.raises(VersionMismatchError):
            validate_channel_open(IbcOrder.ORDERED, GAMM_VERSION, config=config)

    def test_all_rejections_are_handshake_errors(self) -> None:
        for order, version, counterparty in (
            (IbcOrder.ORDERED, GAMM_VERSION, None),
            (IbcOrder.UNORDERED, "reflect", None),
            (IbcOrder.UNORDERED, GAMM_VERSION, "reflect"),
        ):
            with pytest.raises(HandshakeError):
                validate_channel_open(order, version, counterparty, config=GammConfig())


def test_connect_creates_empty_account() -> None:
    store = AccountStore()

    response = on_channel_connect(store, "channel-1234")

    account = store.load("channel-1234")
    assert account.last_update_time == 0
    assert account.remote_spot_price == ""
    assert account.remote_swap_amount == ""
    assert response.attribute("action") == "ibc_connect"
    assert response.attribute("channel_id") == "channel-1234"
    assert response.messages == ()


def test_connect_resets_existing_account() -> None:
    store = AccountStore()
    store.save("channel-1", Account(last_update_time=99, remote_spot_price="3.00"))

    on_channel_connect(store, "channel-1")

    assert store.load("channel-1") == Account()


def test_close_removes_account() -> None:
    store = AccountStore()
    on_channel_connect(store, "channel-1")

    response = on_channel_close(store, "channel-1")

    assert not store.exists("channel-1")
    assert response.attribute("action") == "ibc_close"


def test_close_without_account_succeeds() -> None:
    store = AccountStore()

    response = on_channel_close(store, "channel-never-connected")

    assert response.attribute("channel_id") == "channel-never-connected"
