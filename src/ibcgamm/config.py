"""Module configuration for ibcgamm."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from ibcgamm._constants import DEFAULT_PACKET_LIFETIME, GAMM_VERSION
from ibcgamm.exceptions import GammConfigError
from ibcgamm.models.channel import IbcOrder
from ibcgamm.models.packet import PacketFormat

_ORDER_ALIASES: dict[str, IbcOrder] = {
    "unordered": IbcOrder.UNORDERED,
    "ordered": IbcOrder.ORDERED,
    "order_unordered": IbcOrder.UNORDERED,
    "order_ordered": IbcOrder.ORDERED,
}


def _parse_ordering(value: str | IbcOrder) -> IbcOrder:
    if isinstance(value, IbcOrder):
        return value
    order = _ORDER_ALIASES.get(value.strip().lower()) if isinstance(value, str) else None
    if order is None:
        raise GammConfigError(f"unknown channel ordering: {value!r}")
    return order


def _parse_packet_format(value: str | PacketFormat) -> PacketFormat:
    if isinstance(value, PacketFormat):
        return value
    if not isinstance(value, str):
        raise GammConfigError(f"unknown packet format: {value!r}")
    try:
        return PacketFormat(value.strip().lower())
    except ValueError as exc:
        raise GammConfigError(f"unknown packet format: {value!r}") from exc


def _parse_lifetime(value: Any, source: str) -> int:
    if isinstance(value, bool):
        raise GammConfigError(f"{source} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as exc:
            raise GammConfigError(f"{source} must be an integer, got {value!r}") from exc
    raise GammConfigError(f"{source} must be an integer, got {type(value).__name__}")


@dataclasses.dataclass(frozen=True)
class GammConfig:
    """Static protocol configuration.

    Parameters
    ----------
    version : str
        Channel version both ends must use. Defaults to ``cw-query-1``.
    ordering : IbcOrder
        The single channel ordering accepted during the handshake.
    packet_lifetime : int
        Default packet lifetime in seconds when a request omits ``timeout``.
        Defaults to one hour.
    packet_format : PacketFormat
        Envelope shape for outbound packets. The flat form only carries
        spot-price queries.
    """

    version: str = GAMM_VERSION
    ordering: IbcOrder = IbcOrder.UNORDERED
    packet_lifetime: int = DEFAULT_PACKET_LIFETIME
    packet_format: PacketFormat = PacketFormat.PATH

    def __post_init__(self) -> None:
        if not isinstance(self.version, str) or not self.version:
            raise GammConfigError(f"version must be a non-empty string, got {self.version!r}")
        if isinstance(self.packet_lifetime, bool) or not isinstance(self.packet_lifetime, int):
            raise GammConfigError(f"packet_lifetime must be an integer, got {self.packet_lifetime!r}")
        if self.packet_lifetime <= 0:
            raise GammConfigError(f"packet_lifetime must be positive, got {self.packet_lifetime}")

    @classmethod
    def from_env(cls, **overrides: Any) -> GammConfig:
        """Create configuration from ``IBCGAMM_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        version = env.get("IBCGAMM_VERSION")
        if version is not None and "version" not in overrides:
            config_kwargs["version"] = version

        ordering = env.get("IBCGAMM_ORDERING")
        if ordering is not None and "ordering" not in overrides:
            config_kwargs["ordering"] = _parse_ordering(ordering)

        lifetime = env.get("IBCGAMM_PACKET_LIFETIME")
        if lifetime is not None and "packet_lifetime" not in overrides:
            config_kwargs["packet_lifetime"] = _parse_lifetime(lifetime, "IBCGAMM_PACKET_LIFETIME")

        packet_format = env.get("IBCGAMM_PACKET_FORMAT")
        if packet_format is not None and "packet_format" not in overrides:
            config_kwargs["packet_format"] = _parse_packet_format(packet_format)

        if "packet_lifetime" in overrides:
            overrides["packet_lifetime"] = _parse_lifetime(overrides["packet_lifetime"], "packet_lifetime")
        if "ordering" in overrides:
            overrides["ordering"] = _parse_ordering(overrides["ordering"])
        if "packet_format" in overrides:
            overrides["packet_format"] = _parse_packet_format(overrides["packet_format"])

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
