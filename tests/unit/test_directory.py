"""Unit tests for onionsim.directory module."""

import dataclasses

import pytest

from onionsim.directory import InMemoryDirectory, RelayRecord
from onionsim.errors import AlreadyRegistered, DirectoryError, InvalidInput


class TestRelayRecord:
    """Test RelayRecord dataclass."""

    def test_immutable(self):
        record = RelayRecord(relay_id=1, public_key="key")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.relay_id = 2  # type: ignore[misc]


class TestInMemoryDirectory:
    """Test the in-memory registry."""

    def test_register_and_list(self, keypairs):
        directory = InMemoryDirectory()
        key = keypairs[0].export_public_key()
        directory.register(7, key)
        assert directory.list() == [RelayRecord(relay_id=7, public_key=key)]
        assert directory.get(7) == RelayRecord(relay_id=7, public_key=key)
        assert directory.get(8) is None
        assert len(directory) == 1

    def test_duplicate_rejected(self, directory, keypairs):
        with pytest.raises(AlreadyRegistered) as excinfo:
            directory.register(0, keypairs[4].export_public_key())
        assert excinfo.value.relay_id == 0
        assert directory.get(0).public_key == keypairs[0].export_public_key()

    @pytest.mark.parametrize("relay_id", [-1, "1", 1.5, True, None])
    def test_invalid_relay_id(self, keypairs, relay_id):
        with pytest.raises(InvalidInput):
            InMemoryDirectory().register(relay_id, keypairs[0].export_public_key())

    @pytest.mark.parametrize("public_key", ["", "not-a-key", "AAAA", None])
    def test_invalid_public_key(self, public_key):
        directory = InMemoryDirectory()
        with pytest.raises(InvalidInput):
            directory.register(1, public_key)
        assert directory.list() == []

    def test_errors_share_base(self):
        assert issubclass(AlreadyRegistered, DirectoryError)
        assert issubclass(InvalidInput, DirectoryError)
        assert issubclass(InvalidInput, ValueError)

    def test_list_is_snapshot(self, directory, keypairs):
        """Test that later registrations do not change an earlier snapshot."""
        snapshot = directory.list()
        directory.register(3, keypairs[3].export_public_key())
        assert len(snapshot) == 3
        assert len(directory.list()) == 4

    def test_status(self, directory):
        assert directory.status() == "live"
