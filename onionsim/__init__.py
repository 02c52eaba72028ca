"""onionsim: a minimal onion-routing overlay simulator."""

__version__ = "0.1.0"

from .circuit import BuiltCircuit, Circuit, build_circuit, select_circuit
from .config import Config
from .network import OnionNetwork, launch_network
from .relay import OnionRouter, PeelResult, peel
from .user import User

__all__ = [
    "BuiltCircuit",
    "Circuit",
    "Config",
    "OnionNetwork",
    "OnionRouter",
    "PeelResult",
    "User",
    "build_circuit",
    "launch_network",
    "peel",
    "select_circuit",
]
