"""Relay directory."""

from __future__ import annotations

from .interfaces import RelayDirectory
from .registry import InMemoryDirectory, RelayRecord

__all__ = ["InMemoryDirectory", "RelayDirectory", "RelayRecord"]
