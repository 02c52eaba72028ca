"""Secure randomness utilities."""

from __future__ import annotations

import os
import random
from typing import Optional


def random_bytes(length: int, rng: Optional[random.Random] = None) -> bytes:
    """Return ``length`` random bytes.

    With no ``rng`` the bytes come straight from the OS CSPRNG. Tests pass a
    seeded :class:`random.Random` to make key and IV generation reproducible.
    """

    if length < 0:
        raise ValueError("length must be non-negative")
    if rng is None:
        return os.urandom(length)
    return rng.randbytes(length)


def system_rng() -> random.Random:
    """Return a :class:`random.Random` backed by the OS CSPRNG."""

    return random.SystemRandom()
