"""RSA-OAEP key service.

Relays hold a 2048-bit RSA key pair. Public keys travel through the directory
as base64-encoded SPKI DER; private keys can be exported as base64 PKCS#8 DER
for verification only. Payloads encrypted here are short texts (a base64
symmetric key), so a single OAEP block is always enough.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .errors import DecryptionError, InvalidKeyError

DEFAULT_KEY_SIZE = 2048
DEFAULT_PUBLIC_EXPONENT = 65537


def _oaep() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None,
    )


def _b64decode(data: str) -> bytes:
    return base64.b64decode(data, validate=True)


@dataclass(frozen=True, slots=True)
class RsaKeyPair:
    """An RSA key pair."""

    private_key: rsa.RSAPrivateKey
    public_key: rsa.RSAPublicKey

    @property
    def key_size(self) -> int:
        return self.public_key.key_size

    def export_public_key(self) -> str:
        return export_public_key(self.public_key)

    def export_private_key(self) -> str:
        return export_private_key(self.private_key)


def generate_rsa_keypair(
    key_size: int = DEFAULT_KEY_SIZE, public_exponent: int = DEFAULT_PUBLIC_EXPONENT
) -> RsaKeyPair:
    """Generate a fresh RSA key pair for OAEP encryption."""

    private = rsa.generate_private_key(public_exponent=public_exponent, key_size=key_size)
    return RsaKeyPair(private_key=private, public_key=private.public_key())


def export_public_key(key: rsa.RSAPublicKey) -> str:
    """Serialize a public key as base64 SPKI DER."""

    der = key.public_bytes(
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return base64.b64encode(der).decode("ascii")


def export_private_key(key: rsa.RSAPrivateKey) -> str:
    """Serialize a private key as base64 unencrypted PKCS#8 DER."""

    der = key.private_bytes(
        serialization.Encoding.DER,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    return base64.b64encode(der).decode("ascii")


def import_public_key(data: str) -> rsa.RSAPublicKey:
    """Parse a base64 SPKI DER public key."""

    try:
        key = serialization.load_der_public_key(_b64decode(data))
    except (binascii.Error, ValueError, TypeError) as e:
        raise InvalidKeyError("invalid RSA public key") from e
    if not isinstance(key, rsa.RSAPublicKey):
        raise InvalidKeyError("public key is not an RSA key")
    return key


def import_private_key(data: str) -> rsa.RSAPrivateKey:
    """Parse a base64 PKCS#8 DER private key."""

    try:
        key = serialization.load_der_private_key(_b64decode(data), password=None)
    except (binascii.Error, ValueError, TypeError) as e:
        raise InvalidKeyError("invalid RSA private key") from e
    if not isinstance(key, rsa.RSAPrivateKey):
        raise InvalidKeyError("private key is not an RSA key")
    return key


def rsa_encrypt(data: str, public_key: str | rsa.RSAPublicKey) -> str:
    """Encrypt ``data`` under ``public_key`` and return base64 ciphertext.

    Args:
        data: Short UTF-8 text. Must fit in one OAEP block.
        public_key: Recipient key, either parsed or as exported by
            :func:`export_public_key`.

    Returns:
        Base64 ciphertext. Its length only depends on the modulus size
        (344 characters for 2048-bit keys).
    """

    if isinstance(public_key, str):
        public_key = import_public_key(public_key)
    try:
        ciphertext = public_key.encrypt(data.encode("utf-8"), _oaep())
    except ValueError as e:
        raise InvalidKeyError("payload too large for RSA-OAEP block") from e
    return base64.b64encode(ciphertext).decode("ascii")


def rsa_decrypt(ciphertext: str, private_key: rsa.RSAPrivateKey) -> str:
    """Decrypt base64 ``ciphertext`` produced by :func:`rsa_encrypt`."""

    try:
        plaintext = private_key.decrypt(_b64decode(ciphertext), _oaep())
        return plaintext.decode("utf-8")
    except (binascii.Error, ValueError, UnicodeDecodeError) as e:
        raise DecryptionError("RSA-OAEP decryption failed") from e


def encrypted_length(key_size: int = DEFAULT_KEY_SIZE) -> int:
    """Length of the base64 text produced by :func:`rsa_encrypt`."""

    raw = (key_size + 7) // 8
    return 4 * ((raw + 2) // 3)
