"""Shared exceptions for :mod:`onionsim.crypto`.

The crypto helpers raise a small set of domain-specific exceptions to avoid
leaking backend-specific implementation details to the routing layer.
"""

from __future__ import annotations


class CryptoError(Exception):
    """Base error for cryptographic operations."""


class InvalidKeyError(CryptoError):
    """Raised when key material is malformed or otherwise invalid."""


class DecryptionError(CryptoError):
    """Raised when a ciphertext cannot be decrypted with the given key."""
