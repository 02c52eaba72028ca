from __future__ import annotations

from typing import Protocol

from .registry import RelayRecord


class RelayDirectory(Protocol):
    """Directory abstraction consumed by relays and circuit builders.

    `InMemoryDirectory` is the in-process implementation. A networked one
    would raise `DirectoryUnavailable` when its backend cannot be reached.
    """

    def register(self, relay_id: int, public_key: str) -> None: ...

    def list(self) -> list[RelayRecord]: ...
