from __future__ import annotations

from dataclasses import dataclass

from onionsim.crypto import (
    CryptoError,
    RsaKeyPair,
    encrypted_length,
    import_symmetric_key,
    rsa_decrypt,
    sym_decrypt,
)
from onionsim.errors import DecryptionFailure
from onionsim.packet import HopLayer, WireMessage


@dataclass(frozen=True, slots=True)
class PeelResult:
    """One removed layer: where to send the rest, and what the rest is."""

    next_hop_address: int
    remaining_payload: str


def peel(keypair: RsaKeyPair, incoming: str) -> PeelResult:
    """Remove exactly one layer from ``incoming`` at a relay.

    The key field width follows from the relay's own modulus size. There is
    no integrity tag, so a message split at the wrong offset or encrypted
    for another relay may also decrypt to garbage that then fails to parse.

    Raises:
        MalformedMessage: If the message is too short or the decrypted layer
            does not start with a valid next-hop address.
        DecryptionFailure: If either decryption step fails.
    """

    wire = WireMessage.from_text(incoming, key_length=encrypted_length(keypair.key_size))

    try:
        symmetric_key = import_symmetric_key(rsa_decrypt(wire.encrypted_key, keypair.private_key))
    except CryptoError as e:
        raise DecryptionFailure("could not recover the layer key") from e

    try:
        plaintext = sym_decrypt(symmetric_key, wire.encrypted_layer)
    except CryptoError as e:
        raise DecryptionFailure("could not decrypt the layer") from e

    layer = HopLayer.from_text(plaintext)
    return PeelResult(next_hop_address=layer.next_hop, remaining_payload=layer.payload)
