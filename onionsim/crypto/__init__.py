"""Cryptographic primitives for onion layering.

Modules in this package provide *thin* wrappers around vetted
implementations from :pypi:`cryptography`: RSA-OAEP for wrapping per-hop
keys and AES-256-CBC for the layers themselves.
"""

from __future__ import annotations

from .errors import CryptoError, DecryptionError, InvalidKeyError
from .random import random_bytes, system_rng
from .rsa import (
    RsaKeyPair,
    encrypted_length,
    export_private_key,
    export_public_key,
    generate_rsa_keypair,
    import_private_key,
    import_public_key,
    rsa_decrypt,
    rsa_encrypt,
)
from .symmetric import (
    export_symmetric_key,
    generate_symmetric_key,
    import_symmetric_key,
    sym_decrypt,
    sym_encrypt,
)

__all__ = [
    "CryptoError",
    "DecryptionError",
    "InvalidKeyError",
    "RsaKeyPair",
    "encrypted_length",
    "export_private_key",
    "export_public_key",
    "export_symmetric_key",
    "generate_rsa_keypair",
    "generate_symmetric_key",
    "import_private_key",
    "import_public_key",
    "import_symmetric_key",
    "random_bytes",
    "rsa_decrypt",
    "rsa_encrypt",
    "sym_decrypt",
    "sym_encrypt",
    "system_rng",
]
