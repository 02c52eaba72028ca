"""Exceptions raised by the onion-routing layer."""

from __future__ import annotations


class OnionError(Exception):
    """Base exception for onion-routing operations."""


class InsufficientRelays(OnionError):
    """Raised when the directory holds fewer relays than a circuit needs."""

    def __init__(self, available: int, required: int) -> None:
        super().__init__(f"need {required} distinct relays, directory has {available}")
        self.available = available
        self.required = required


class InvalidAddress(OnionError, ValueError):
    """Raised when an address does not fit the fixed-width hop field."""


class ProtocolError(OnionError):
    """A wire message could not be peeled.

    Without an authentication tag a wrong key and a mangled message look the
    same, so callers should handle this base class rather than a subclass.
    """


class MalformedMessage(ProtocolError):
    """Wrong length or unparsable structure."""


class DecryptionFailure(ProtocolError):
    """Key mismatch or corrupted ciphertext."""


class DirectoryError(OnionError):
    """Base exception for directory operations."""


class DirectoryUnavailable(DirectoryError):
    """The relay snapshot could not be read."""


class AlreadyRegistered(DirectoryError):
    """A relay with the same identifier is already registered."""

    def __init__(self, relay_id: int) -> None:
        super().__init__(f"relay {relay_id} is already registered")
        self.relay_id = relay_id


class InvalidInput(DirectoryError, ValueError):
    """A registration request is malformed."""
