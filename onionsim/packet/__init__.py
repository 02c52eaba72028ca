"""Wire encoding of onion layers."""

from __future__ import annotations

from .schema import (
    ADDRESS_WIDTH,
    CIRCUIT_LENGTH,
    ENCRYPTED_KEY_LENGTH,
    MAX_ADDRESS,
    Address,
    HopLayer,
    WireMessage,
    decode_address,
    encode_address,
)

__all__ = [
    "ADDRESS_WIDTH",
    "CIRCUIT_LENGTH",
    "ENCRYPTED_KEY_LENGTH",
    "MAX_ADDRESS",
    "Address",
    "HopLayer",
    "WireMessage",
    "decode_address",
    "encode_address",
]
