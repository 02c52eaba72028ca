"""AES-256-CBC wrapper.

Ciphertexts are serialized as ``base64(iv || ciphertext)`` with a fresh
random 16-byte IV per message. There is no authentication tag: a wrong key
usually surfaces as a padding error, but corrupted input can also decrypt to
garbage.
"""

from __future__ import annotations

import base64
import binascii
import random
from typing import Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import DecryptionError, InvalidKeyError
from .random import random_bytes

KEY_LENGTH = 32
IV_LENGTH = 16
BLOCK_BITS = 128


def generate_symmetric_key(rng: Optional[random.Random] = None) -> bytes:
    """Generate a fresh 32-byte AES key."""

    return random_bytes(KEY_LENGTH, rng)


def export_symmetric_key(key: bytes) -> str:
    """Serialize a raw AES key as base64."""

    _check_key(key)
    return base64.b64encode(key).decode("ascii")


def import_symmetric_key(data: str) -> bytes:
    """Parse a base64 AES key produced by :func:`export_symmetric_key`."""

    try:
        key = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidKeyError("symmetric key is not valid base64") from e
    _check_key(key)
    return key


def _check_key(key: bytes) -> None:
    if len(key) != KEY_LENGTH:
        raise InvalidKeyError(f"AES-256 key must be {KEY_LENGTH} bytes")


def sym_encrypt(
    key: bytes,
    data: str,
    *,
    iv: Optional[bytes] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """Encrypt text with AES-256-CBC.

    Args:
        key: 32-byte key.
        data: Plaintext, encoded as UTF-8.
        iv: 16-byte IV. If omitted, a random IV is generated.
        rng: Source for the random IV.

    Returns:
        Base64 of ``iv || ciphertext``.
    """

    _check_key(key)
    if iv is None:
        iv = random_bytes(IV_LENGTH, rng)
    if len(iv) != IV_LENGTH:
        raise ValueError("AES-CBC IV must be 16 bytes")

    padder = padding.PKCS7(BLOCK_BITS).padder()
    padded = padder.update(data.encode("utf-8")) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ct = encryptor.update(padded) + encryptor.finalize()
    return base64.b64encode(iv + ct).decode("ascii")


def sym_decrypt(key: bytes | str, data: str) -> str:
    """Decrypt base64 ``iv || ciphertext`` produced by :func:`sym_encrypt`.

    ``key`` may be raw bytes or the base64 form from
    :func:`export_symmetric_key`.
    """

    if isinstance(key, str):
        key = import_symmetric_key(key)
    _check_key(key)

    try:
        blob = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecryptionError("ciphertext is not valid base64") from e

    iv, ct = blob[:IV_LENGTH], blob[IV_LENGTH:]
    if len(iv) != IV_LENGTH or not ct or len(ct) % (BLOCK_BITS // 8):
        raise DecryptionError("ciphertext has invalid length")

    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ct) + decryptor.finalize()
    try:
        unpadder = padding.PKCS7(BLOCK_BITS).unpadder()
        plaintext = unpadder.update(padded) + unpadder.finalize()
        return plaintext.decode("utf-8")
    except (ValueError, UnicodeDecodeError) as e:
        raise DecryptionError("AES-CBC decryption failed") from e
