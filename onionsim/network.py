"""Launching a complete simulated overlay."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Optional

from onionsim.config import Config
from onionsim.crypto import system_rng
from onionsim.directory import InMemoryDirectory
from onionsim.relay import OnionRouter
from onionsim.transport import LocalTransport
from onionsim.user import User

logger = logging.getLogger(__name__)


@dataclass
class OnionNetwork:
    """A directory, its relays and its users, wired to one transport."""

    config: Config
    directory: InMemoryDirectory = field(default_factory=InMemoryDirectory)
    transport: LocalTransport = field(default_factory=LocalTransport)
    relays: Dict[int, OnionRouter] = field(default_factory=dict)
    users: Dict[int, User] = field(default_factory=dict)

    def add_relay(self, relay_id: int) -> OnionRouter:
        """Start a relay: generate its keys, register it, bind its address."""
        relay = OnionRouter(relay_id, self.directory, self.transport, config=self.config)
        relay.register()
        self.transport.bind(relay.address, relay.receive_message)
        self.relays[relay_id] = relay
        return relay

    def add_user(self, user_id: int, rng: Optional[random.Random] = None) -> User:
        """Start a user and bind its address."""
        user = User(user_id, self.directory, self.transport, config=self.config, rng=rng)
        self.transport.bind(user.address, user.receive_message)
        self.users[user_id] = user
        return user

    def relay(self, relay_id: int) -> OnionRouter:
        return self.relays[relay_id]

    def user(self, user_id: int) -> User:
        return self.users[user_id]


def launch_network(
    num_relays: int,
    num_users: int,
    *,
    config: Optional[Config] = None,
    rng: Optional[random.Random] = None,
) -> OnionNetwork:
    """
    Start ``num_relays`` relays and ``num_users`` users.

    Relays and users are numbered from 0. All users share ``rng``, which
    defaults to the OS CSPRNG.

    Raises:
        ValueError: If the configuration is invalid or a count is negative.
    """
    config = config or Config()
    errors = config.validate()
    if errors:
        raise ValueError("invalid configuration: " + "; ".join(errors))
    if num_relays < 0 or num_users < 0:
        raise ValueError("counts must be non-negative")

    rng = rng or system_rng()
    network = OnionNetwork(config=config)
    for relay_id in range(num_relays):
        network.add_relay(relay_id)
    for user_id in range(num_users):
        network.add_user(user_id, rng=rng)

    logger.info("launched network with %d relays and %d users", num_relays, num_users)
    return network
