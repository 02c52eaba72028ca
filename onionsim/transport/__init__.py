"""Transport layer for moving messages between simulated processes.

The routing core only needs :class:`Transport`: deliver one text message to
the endpoint bound at an integer port address. :class:`LocalTransport`
implements it in memory, standing in for the HTTP plumbing between relay and
user processes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, Protocol

logger = logging.getLogger(__name__)

MessageHandler = Callable[[str], Awaitable[None]]


class TransportError(Exception):
    """Base exception for transport operations."""


class UnknownAddress(TransportError):
    """No endpoint is bound at the requested address."""

    def __init__(self, address: int) -> None:
        super().__init__(f"no endpoint listening on {address}")
        self.address = address


class Transport(Protocol):
    """Delivers messages to bound endpoints."""

    async def send(self, address: int, message: str) -> None: ...


@dataclass
class TransportStats:
    """Counters kept by :class:`LocalTransport`."""

    messages_sent: int = 0
    messages_failed: int = 0
    bytes_sent: int = 0


@dataclass
class LocalTransport:
    """
    In-memory transport keyed by port address.

    ``send`` awaits the receiving handler, so a failure at the receiver is
    reported back to the sender. Nothing is retried or queued.
    """

    handlers: Dict[int, MessageHandler] = field(default_factory=dict)
    stats: TransportStats = field(default_factory=TransportStats)

    def bind(self, address: int, handler: MessageHandler) -> None:
        """
        Bind a handler to an address.

        Raises:
            TransportError: If the address is already bound.
        """
        if address in self.handlers:
            raise TransportError(f"address {address} already in use")
        self.handlers[address] = handler
        logger.debug("bound endpoint on %d", address)

    def unbind(self, address: int) -> None:
        """Release an address. Unknown addresses are ignored."""
        self.handlers.pop(address, None)

    def is_bound(self, address: int) -> bool:
        return address in self.handlers

    async def send(self, address: int, message: str) -> None:
        """
        Deliver ``message`` to the endpoint bound at ``address``.

        Raises:
            UnknownAddress: If nothing is bound there.
            Exception: Whatever the receiving handler raises.
        """
        handler = self.handlers.get(address)
        if handler is None:
            self.stats.messages_failed += 1
            raise UnknownAddress(address)

        try:
            await handler(message)
        except Exception:
            self.stats.messages_failed += 1
            raise

        self.stats.messages_sent += 1
        self.stats.bytes_sent += len(message)

