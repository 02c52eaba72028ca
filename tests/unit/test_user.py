"""Unit tests for onionsim.user module."""

import pytest

from onionsim.directory import InMemoryDirectory
from onionsim.errors import DirectoryUnavailable, InsufficientRelays, InvalidAddress
from onionsim.relay import peel
from onionsim.user import User


class FailingDirectory:
    """Directory whose backend is down."""

    def register(self, relay_id, public_key):
        raise ConnectionError("registry unreachable")

    def list(self):
        raise ConnectionError("registry unreachable")


class TestUser:
    """Test User endpoint."""

    @pytest.fixture
    def user(self, directory, recording_transport, sample_config, rng):
        return User(0, directory, recording_transport, config=sample_config, rng=rng)

    def test_initial_state(self, user):
        assert user.address == 3000
        assert user.status() == "live"
        assert user.last_received_message is None
        assert user.last_sent_message is None
        assert user.last_circuit is None

    @pytest.mark.asyncio
    async def test_send_message(self, user, recording_transport, keys_by_relay):
        built = await user.send_message("hello", 1)

        assert user.last_sent_message == "hello"
        assert user.last_circuit == built.circuit.relay_ids
        assert sorted(user.last_circuit) == [0, 1, 2]
        assert recording_transport.sent == [(built.entry_address, built.wire_message)]
        assert built.entry_address == 4000 + user.last_circuit[0]

        message = built.wire_message
        for relay_id in user.last_circuit:
            result = peel(keys_by_relay[relay_id], message)
            message = result.remaining_payload
        assert result.next_hop_address == 3001
        assert message == "hello"

    @pytest.mark.asyncio
    async def test_receive_message(self, user):
        await user.receive_message("incoming")
        assert user.last_received_message == "incoming"

    @pytest.mark.asyncio
    async def test_insufficient_relays_sends_nothing(
        self, keypairs, recording_transport, sample_config
    ):
        directory = InMemoryDirectory()
        directory.register(0, keypairs[0].export_public_key())
        directory.register(1, keypairs[1].export_public_key())
        user = User(0, directory, recording_transport, config=sample_config)

        with pytest.raises(InsufficientRelays):
            await user.send_message("hello", 1)

        assert recording_transport.sent == []
        assert user.last_sent_message is None
        assert user.last_circuit is None

    @pytest.mark.asyncio
    async def test_directory_unavailable(self, recording_transport):
        user = User(0, FailingDirectory(), recording_transport)
        with pytest.raises(DirectoryUnavailable) as excinfo:
            await user.send_message("hello", 1)
        assert isinstance(excinfo.value.__cause__, ConnectionError)
        assert recording_transport.sent == []

    @pytest.mark.asyncio
    async def test_destination_out_of_range(self, directory, recording_transport):
        user = User(0, directory, recording_transport)
        with pytest.raises(InvalidAddress):
            await user.send_message("hello", 10**10)
        assert recording_transport.sent == []

    @pytest.mark.asyncio
    async def test_rereads_directory_each_send(self, user, directory, keypairs):
        """Test that relays registered after a send are used by later sends."""
        await user.send_message("first", 1)
        directory.register(3, keypairs[3].export_public_key())
        directory.register(4, keypairs[4].export_public_key())

        seen = set()
        for _ in range(30):
            built = await user.send_message("again", 1)
            seen.update(built.circuit.relay_ids)
        assert {3, 4} & seen
