"""Channel lifecycle: handshake validation and account creation/removal.

Per channel the lifecycle is::

    Unconnected -> Open-Pending (validated) -> Connected (account exists) -> Closed (account absent)

Only a connected channel accepts queries.
"""

from __future__ import annotations

import logging

from ibcgamm.config import GammConfig
from ibcgamm.exceptions import OrderMismatchError, VersionMismatchError
from ibcgamm.models.channel import IbcOrder
from ibcgamm.models.response import Response
from ibcgamm.state.store import Account, AccountStore

_logger = logging.getLogger(__name__)

_ORDER_NAMES: dict[IbcOrder, str] = {
    IbcOrder.UNORDERED: "unordered",
    IbcOrder.ORDERED: "ordered",
}


def validate_channel_open(
    order: IbcOrder,
    version: str,
    counterparty_version: str | None = None,
    *,
    config: GammConfig,
) -> None:
    """Enforce the configured ordering and version during the handshake.

    Ordering is checked first, then the channel version, then the
    counterparty version when the host already knows it (OpenTry).
    """
    if order != config.ordering:
        _logger.info("Rejecting channel: ordering %s, need %s", order, config.ordering)
        raise OrderMismatchError(
            f"Only supports {_ORDER_NAMES[config.ordering]} channels",
            expected=config.ordering,
            actual=order,
        )

    if version != config.version:
        _logger.info("Rejecting channel: version %r, need %r", version, config.version)
        raise VersionMismatchError(
            f"Must set version to `{config.version}`",
            expected=config.version,
            actual=version,
        )

    if counterparty_version is not None and counterparty_version != config.version:
        _logger.info("Rejecting channel: counterparty version %r, need %r", counterparty_version, config.version)
        raise VersionMismatchError(
            f"Counterparty version must be `{config.version}`",
            expected=config.version,
            actual=counterparty_version,
        )


def on_channel_connect(store: AccountStore, channel_id: str) -> Response:
    """Create (or reset) an empty account for a newly established channel."""
    store.save(channel_id, Account())
    _logger.debug("Channel %s connected; account created", channel_id)
    return Response().add_attribute("action", "ibc_connect").add_attribute("channel_id", channel_id)


def on_channel_close(store: AccountStore, channel_id: str) -> Response:
    """On closed channel, simply delete the account from our local store."""
    store.delete(channel_id)
    _logger.debug("Channel %s closed; account removed", channel_id)
    return Response().add_attribute("action", "ibc_close").add_attribute("channel_id", channel_id)
