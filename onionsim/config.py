"""Configuration management for the onion-routing simulator."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Optional, List
import os

from onionsim.packet.schema import ADDRESS_WIDTH

ENV_PREFIX = "ONIONSIM_"


@dataclass
class PortConfig:
    """Port layout of a simulated network.

    Relay ``n`` listens on ``base_onion_router_port + n`` and user ``n`` on
    ``base_user_port + n``.
    """

    base_onion_router_port: int = 4000
    base_user_port: int = 3000


class Config:
    """
    Main configuration manager for onionsim.

    Only the port layout is configurable. Circuit length and key size are
    protocol constants: every circuit has three relays and every key field is
    the width of a 2048-bit RSA ciphertext.
    """

    def __init__(self, ports: Optional[PortConfig] = None) -> None:
        """
        Initialize configuration manager.

        Args:
            ports: Port layout. Uses defaults if None.
        """
        self.ports = ports or PortConfig()

    @classmethod
    def from_environment(cls, environ: Optional[Dict[str, str]] = None) -> Config:
        """
        Build a configuration from ``ONIONSIM_<FIELD>`` variables.

        Each port field can be overridden, e.g. ``ONIONSIM_BASE_USER_PORT=5000``.

        Raises:
            ValueError: If a variable is not an integer.
        """
        environ = os.environ if environ is None else environ
        config = cls()
        for f in fields(config.ports):
            name = ENV_PREFIX + f.name.upper()
            raw = environ.get(name)
            if raw is None:
                continue
            try:
                setattr(config.ports, f.name, int(raw))
            except ValueError as e:
                raise ValueError(f"{name} must be an integer") from e
        return config

    def relay_address(self, relay_id: int) -> int:
        """Port of relay ``relay_id``."""
        return self.ports.base_onion_router_port + relay_id

    def user_address(self, user_id: int) -> int:
        """Port of user ``user_id``."""
        return self.ports.base_user_port + user_id

    def validate(self) -> List[str]:
        """
        Validate current configuration.

        Returns:
            List of validation errors. Empty if valid.
        """
        errors = []
        limit = 10 ** ADDRESS_WIDTH

        for f in fields(self.ports):
            port = getattr(self.ports, f.name)
            if not 0 < port < limit:
                errors.append(f"{f.name} must fit in {ADDRESS_WIDTH} digits")

        return errors
