"""Test configuration for onionsim package."""

import random
from typing import Dict, List, Tuple

import pytest

from onionsim.config import Config
from onionsim.crypto import RsaKeyPair, generate_rsa_keypair
from onionsim.directory import InMemoryDirectory, RelayRecord


class RecordingTransport:
    """Transport double that stores sends instead of delivering them."""

    def __init__(self) -> None:
        self.sent: List[Tuple[int, str]] = []

    async def send(self, address: int, message: str) -> None:
        self.sent.append((address, message))


@pytest.fixture(scope="session")
def keypairs() -> List[RsaKeyPair]:
    """Five 2048-bit key pairs, shared across the session since RSA keygen is slow."""
    return [generate_rsa_keypair() for _ in range(5)]


@pytest.fixture
def sample_config() -> Config:
    """Provide a default configuration for testing."""
    return Config()


@pytest.fixture
def rng() -> random.Random:
    """Deterministic randomness source."""
    return random.Random(1234)


@pytest.fixture
def directory(keypairs) -> InMemoryDirectory:
    """A directory with relays 0, 1 and 2 registered."""
    directory = InMemoryDirectory()
    for relay_id in range(3):
        directory.register(relay_id, keypairs[relay_id].export_public_key())
    return directory


@pytest.fixture
def keys_by_relay(keypairs) -> Dict[int, RsaKeyPair]:
    """Relay id to key pair, matching the ``directory`` fixture."""
    return {relay_id: keypairs[relay_id] for relay_id in range(5)}


@pytest.fixture
def recording_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def make_records(keypairs):
    """Build relay records for the given ids from the session key pairs."""

    def _make(ids) -> List[RelayRecord]:
        return [RelayRecord(relay_id=i, public_key=keypairs[i].export_public_key()) for i in ids]

    return _make
