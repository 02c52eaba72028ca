"""Fixed-width wire schema shared by the circuit builder and the relays.

A wire message is plain text::

    encrypted_key (ENCRYPTED_KEY_LENGTH chars) || encrypted_layer

and ``encrypted_layer`` decrypts to::

    next_hop (ADDRESS_WIDTH chars, zero-padded decimal) || inner_payload

Both widths are defined here only. A builder and a relay that disagree on
either constant split messages at the wrong offset without any error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Union

from onionsim.crypto.rsa import DEFAULT_KEY_SIZE, encrypted_length
from onionsim.errors import InvalidAddress, MalformedMessage

ADDRESS_WIDTH: Final[int] = 10
MAX_ADDRESS: Final[int] = 10**ADDRESS_WIDTH - 1

# Base64 of one 2048-bit RSA-OAEP block.
ENCRYPTED_KEY_LENGTH: Final[int] = encrypted_length(DEFAULT_KEY_SIZE)

CIRCUIT_LENGTH: Final[int] = 3

Address = Union[int, str]


def encode_address(address: Address) -> str:
    """Render a port as a zero-padded ``ADDRESS_WIDTH``-character field.

    Accepts an integer port or a string of decimal digits (already padded or
    not). Zero, negative values and anything wider than ``ADDRESS_WIDTH``
    digits are rejected.

    Raises:
        InvalidAddress: If the address cannot be encoded.
    """

    if isinstance(address, bool):
        raise InvalidAddress(f"invalid address: {address!r}")
    if isinstance(address, str):
        if not address.isascii() or not address.isdigit():
            raise InvalidAddress(f"address must be decimal digits: {address!r}")
        if len(address) > ADDRESS_WIDTH:
            raise InvalidAddress(f"address wider than {ADDRESS_WIDTH} digits: {address!r}")
        value = int(address)
    elif isinstance(address, int):
        value = address
    else:
        raise InvalidAddress(f"invalid address type: {type(address).__name__}")

    if not 0 < value <= MAX_ADDRESS:
        raise InvalidAddress(f"address out of range: {value}")
    return str(value).zfill(ADDRESS_WIDTH)


def decode_address(field: str) -> int:
    """Parse a next-hop field produced by :func:`encode_address`.

    A zero address is treated as malformed rather than as "no next hop".

    Raises:
        MalformedMessage: If the field is not a valid address.
    """

    if len(field) != ADDRESS_WIDTH:
        raise MalformedMessage(f"next hop must be {ADDRESS_WIDTH} characters")
    if not field.isascii() or not field.isdigit():
        raise MalformedMessage("next hop is not a decimal address")
    value = int(field)
    if value == 0:
        raise MalformedMessage("next hop address is unset")
    return value


@dataclass(frozen=True, slots=True)
class WireMessage:
    """One onion layer as seen on the wire."""

    encrypted_key: str
    encrypted_layer: str

    def to_text(self) -> str:
        """Serialize as ``encrypted_key || encrypted_layer``."""

        return self.encrypted_key + self.encrypted_layer

    @classmethod
    def from_text(cls, text: str, *, key_length: int = ENCRYPTED_KEY_LENGTH) -> WireMessage:
        """Split a wire message at the fixed key-field boundary.

        Raises:
            MalformedMessage: If there is nothing after the key field.
        """

        if not isinstance(text, str):
            raise MalformedMessage("wire message must be text")
        if len(text) <= key_length:
            raise MalformedMessage(
                f"wire message too short: {len(text)} chars, key field is {key_length}"
            )
        return cls(encrypted_key=text[:key_length], encrypted_layer=text[key_length:])


@dataclass(frozen=True, slots=True)
class HopLayer:
    """Decrypted content of one layer."""

    next_hop: int
    payload: str

    def to_text(self) -> str:
        return encode_address(self.next_hop) + self.payload

    @classmethod
    def from_text(cls, text: str) -> HopLayer:
        if len(text) < ADDRESS_WIDTH:
            raise MalformedMessage("decrypted layer shorter than the next-hop field")
        return cls(next_hop=decode_address(text[:ADDRESS_WIDTH]), payload=text[ADDRESS_WIDTH:])
