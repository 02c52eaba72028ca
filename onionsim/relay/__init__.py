"""Relay functionality: peeling one onion layer and forwarding the rest."""

from __future__ import annotations

from .peeler import PeelResult, peel
from .router import OnionRouter, RelayObservations

__all__ = ["OnionRouter", "PeelResult", "RelayObservations", "peel"]
