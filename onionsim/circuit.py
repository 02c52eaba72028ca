"""Circuit selection and onion layering.

The builder picks distinct relays from a directory snapshot and wraps the
message once per relay, starting at the exit and finishing at the entry::

    address, payload = destination, message
    for relay in reversed(circuit):
        key = fresh symmetric key
        layer = AES(key, pad10(address) || payload)
        payload = RSA(relay.public_key, key) || layer
        address = relay address

The result is addressed to the entry relay. Each relay can only recover the
address of the hop that follows it.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from onionsim.crypto import (
    encrypted_length,
    export_symmetric_key,
    generate_symmetric_key,
    import_public_key,
    rsa_encrypt,
    sym_encrypt,
    system_rng,
)
from onionsim.directory import RelayRecord
from onionsim.errors import InsufficientRelays, MalformedMessage
from onionsim.packet import CIRCUIT_LENGTH, Address, HopLayer, WireMessage, encode_address

logger = logging.getLogger(__name__)

RelayAddressFn = Callable[[RelayRecord], Address]


@dataclass(frozen=True, slots=True)
class Circuit:
    """Ordered relays of one message, entry first."""

    relays: tuple[RelayRecord, ...]

    def __post_init__(self) -> None:
        ids = [r.relay_id for r in self.relays]
        if len(set(ids)) != len(ids):
            raise ValueError("circuit relays must be distinct")

    @property
    def relay_ids(self) -> list[int]:
        return [r.relay_id for r in self.relays]

    @property
    def entry(self) -> RelayRecord:
        return self.relays[0]

    @property
    def exit(self) -> RelayRecord:
        return self.relays[-1]

    def __len__(self) -> int:
        return len(self.relays)


@dataclass(frozen=True, slots=True)
class BuiltCircuit:
    """Result of :func:`build_circuit`."""

    entry_address: int
    wire_message: str
    circuit: Circuit


def select_circuit(
    snapshot: Sequence[RelayRecord],
    *,
    rng: Optional[random.Random] = None,
) -> Circuit:
    """Choose three distinct relays uniformly at random.

    Records are deduplicated by ``relay_id`` before sampling, so a snapshot
    listing the same relay twice does not count it twice.

    Raises:
        InsufficientRelays: If fewer than three distinct relays exist.
    """

    if rng is None:
        rng = system_rng()

    unique: dict[int, RelayRecord] = {}
    for record in snapshot:
        unique.setdefault(record.relay_id, record)
    if len(unique) < CIRCUIT_LENGTH:
        raise InsufficientRelays(available=len(unique), required=CIRCUIT_LENGTH)

    # Sort so a seeded rng gives the same circuit whatever the listing order.
    candidates = sorted(unique.values(), key=lambda r: r.relay_id)
    return Circuit(relays=tuple(rng.sample(candidates, CIRCUIT_LENGTH)))


def wrap_layer(
    relay: RelayRecord,
    next_hop: Address,
    payload: str,
    *,
    rng: Optional[random.Random] = None,
) -> str:
    """Add one layer for ``relay`` around ``payload``."""

    public_key = import_public_key(relay.public_key)
    key = generate_symmetric_key(rng)
    plaintext = HopLayer(next_hop=int(encode_address(next_hop)), payload=payload).to_text()
    layer = sym_encrypt(key, plaintext, rng=rng)
    encrypted_key = rsa_encrypt(export_symmetric_key(key), public_key)

    expected = encrypted_length(public_key.key_size)
    if len(encrypted_key) != expected:
        raise MalformedMessage(
            f"encrypted key for relay {relay.relay_id} is {len(encrypted_key)} chars, expected {expected}"
        )
    return WireMessage(encrypted_key=encrypted_key, encrypted_layer=layer).to_text()


def build_circuit(
    snapshot: Sequence[RelayRecord],
    destination_address: Address,
    message: str,
    *,
    relay_address: RelayAddressFn,
    rng: Optional[random.Random] = None,
) -> BuiltCircuit:
    """Select a circuit and build the nested wire message for it.

    Args:
        snapshot: Relays as listed by the directory, in any order.
        destination_address: Final recipient port (int or digit string).
        message: Plaintext application message.
        relay_address: Maps a relay record to its network address.
        rng: Source of randomness for selection, keys and IVs. Defaults to
            the OS CSPRNG.

    Returns:
        The entry relay address, the wire message to send there and the
        chosen circuit.

    Raises:
        InvalidAddress: If the destination or a relay address does not fit
            the fixed-width next-hop field.
        InsufficientRelays: If the snapshot is too small.
    """

    if rng is None:
        rng = system_rng()

    # Validate before selecting so a bad destination never reaches a relay.
    address = int(encode_address(destination_address))

    circuit = select_circuit(snapshot, rng=rng)

    payload = message
    for relay in reversed(circuit.relays):
        payload = wrap_layer(relay, address, payload, rng=rng)
        address = int(encode_address(relay_address(relay)))

    logger.debug(
        "built %d-hop circuit %s, wire message %d chars",
        len(circuit),
        circuit.relay_ids,
        len(payload),
    )
    return BuiltCircuit(entry_address=address, wire_message=payload, circuit=circuit)
