"""Base model and wire types shared by every ibcgamm message.

Every wire model inherits from :class:`GammBaseModel` which provides:

* frozen instances, so an envelope cannot change once it is sent.
* ``extra="forbid"`` so a payload with unexpected keys fails to decode
  instead of being silently misread as another variant.

Wire encodings follow the host chain's JSON conventions:

* :data:`Binary` is raw bytes, serialized as standard base64.
* :data:`Uint128` is an unsigned 128-bit integer, serialized as a decimal
  string so it survives JSON parsers limited to 53-bit numbers.
* :data:`UDecimal` is an unsigned fixed-point number with at most 18
  fractional digits, serialized as a plain decimal string.
"""

from __future__ import annotations

import base64
import binascii
import re
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer, model_validator

from ibcgamm._constants import DECIMAL_PLACES, UINT128_MAX


def parse_binary(value: Any) -> bytes:
    """Accept raw bytes or a base64 string and return bytes."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"invalid base64 data: {exc}") from exc
    raise ValueError(f"expected base64 string, got {type(value).__name__}")


def _serialize_binary(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


Binary = Annotated[
    bytes,
    BeforeValidator(parse_binary),
    PlainSerializer(_serialize_binary, return_type=str, when_used="json"),
]
"""Bytes that travel as base64 in JSON."""


def parse_uint128(value: Any) -> int:
    """Accept an int or a decimal string in ``[0, 2**128)``."""
    if isinstance(value, bool):
        raise ValueError("expected unsigned integer, got bool")
    if isinstance(value, str):
        text = value.strip()
        if not text.isdigit():
            raise ValueError(f"invalid Uint128 string: {value!r}")
        number = int(text)
    elif isinstance(value, int):
        number = value
    else:
        raise ValueError(f"expected Uint128, got {type(value).__name__}")
    if not 0 <= number <= UINT128_MAX:
        raise ValueError(f"Uint128 out of range: {number}")
    return number


Uint128 = Annotated[
    int,
    BeforeValidator(parse_uint128),
    PlainSerializer(str, return_type=str, when_used="json"),
]
"""Unsigned 128-bit integer that travels as a decimal string in JSON."""


_PLAIN_DECIMAL = re.compile(r"[0-9]+(?:\.[0-9]+)?")
_UDECIMAL_MAX = Decimal(f"{UINT128_MAX}e-{DECIMAL_PLACES}")


def parse_udecimal(value: Any) -> Decimal:
    """Accept a plain ``123.456`` string or a finite Decimal.

    Signs, exponent notation and more than 18 fractional digits are
    rejected, as is anything above ``(2**128 - 1) / 10**18``.
    """
    if isinstance(value, str):
        text = value.strip()
        if _PLAIN_DECIMAL.fullmatch(text) is None:
            raise ValueError(f"invalid decimal string: {value!r}")
        number = Decimal(text)
    elif isinstance(value, Decimal):
        if not value.is_finite() or value.is_signed():
            raise ValueError(f"decimal must be finite and unsigned: {value}")
        number = value
    else:
        raise ValueError(f"expected decimal string, got {type(value).__name__}")
    if number.as_tuple().exponent < -DECIMAL_PLACES:
        raise ValueError(f"decimal has more than {DECIMAL_PLACES} fractional digits: {value!r}")
    if number > _UDECIMAL_MAX:
        raise ValueError(f"decimal out of range: {value!r}")
    return number


def _serialize_udecimal(value: Decimal) -> str:
    return format(value, "f")


UDecimal = Annotated[
    Decimal,
    BeforeValidator(parse_udecimal),
    PlainSerializer(_serialize_udecimal, return_type=str, when_used="json"),
]
"""Unsigned 18-digit fixed-point decimal that travels as a plain string in JSON."""


class GammBaseModel(BaseModel):
    """Base for ibcgamm wire models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    def to_bytes(self) -> bytes:
        """Compact JSON encoding with unset optional fields omitted."""
        return self.model_dump_json(exclude_none=True).encode()


class TaggedUnion(GammBaseModel):
    """A snake_case tagged enum: exactly one optional field is set.

    ``{"spot_price": {...}}`` decodes into the subclass with only
    ``spot_price`` populated. Dumping with ``exclude_none`` restores the
    single-key shape.
    """

    @model_validator(mode="after")
    def _exactly_one_variant(self) -> TaggedUnion:
        present = [name for name in type(self).model_fields if getattr(self, name) is not None]
        if len(present) != 1:
            expected = " | ".join(type(self).model_fields)
            raise ValueError(f"expected exactly one of {expected}, got {present or 'none'}")
        return self

    @property
    def tag(self) -> str:
        return next(name for name in type(self).model_fields if getattr(self, name) is not None)

    @property
    def value(self) -> Any:
        return getattr(self, self.tag)
