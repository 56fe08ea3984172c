"""Effects produced by handling one event.

A handler never talks to the transport directly. It returns a
:class:`Response` listing the packets to send and the audit attributes to
record; the caller forwards the packets once the event has committed.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ibcgamm.models._base import Binary


class Attribute(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    value: str


class SendPacket(BaseModel):
    """Outbound-send effect for the transport."""

    model_config = ConfigDict(frozen=True)

    channel_id: str
    data: Binary
    timeout: int = Field(ge=0, description="Absolute deadline in nanoseconds")


class Response(BaseModel):
    model_config = ConfigDict(frozen=True)

    messages: tuple[SendPacket, ...] = ()
    attributes: tuple[Attribute, ...] = ()

    def add_message(self, message: SendPacket) -> Response:
        return self.model_copy(update={"messages": (*self.messages, message)})

    def add_attribute(self, key: str, value: object) -> Response:
        attribute = Attribute(key=key, value=str(value))
        return self.model_copy(update={"attributes": (*self.attributes, attribute)})

    def attribute(self, key: str) -> str | None:
        """Value of the first attribute named *key*, if any."""
        for attribute in self.attributes:
            if attribute.key == key:
                return attribute.value
        return None
