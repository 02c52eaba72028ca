"""User endpoint: sends messages through circuits and receives deliveries."""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from onionsim.circuit import BuiltCircuit, build_circuit
from onionsim.config import Config
from onionsim.crypto import system_rng
from onionsim.directory import RelayDirectory, RelayRecord
from onionsim.errors import DirectoryError, DirectoryUnavailable
from onionsim.transport import Transport

logger = logging.getLogger(__name__)


class User:
    """
    A user process of the overlay.

    Every :meth:`send_message` reads a fresh directory snapshot, builds a new
    circuit, and hands the wire message to the entry relay.
    """

    def __init__(
        self,
        user_id: int,
        directory: RelayDirectory,
        transport: Transport,
        config: Optional[Config] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.user_id = user_id
        self.directory = directory
        self.transport = transport
        self.config = config or Config()
        self.rng = rng or system_rng()

        self.last_received_message: Optional[str] = None
        self.last_sent_message: Optional[str] = None
        self.last_circuit: Optional[List[int]] = None

    @property
    def address(self) -> int:
        return self.config.user_address(self.user_id)

    def _snapshot(self) -> List[RelayRecord]:
        try:
            return list(self.directory.list())
        except DirectoryError:
            raise
        except Exception as e:
            raise DirectoryUnavailable("could not read the relay directory") from e

    async def send_message(self, message: str, destination_user_id: int) -> BuiltCircuit:
        """
        Send ``message`` to user ``destination_user_id`` through a new circuit.

        Args:
            message: Plaintext application message.
            destination_user_id: Recipient user identifier.

        Returns:
            The built circuit and wire message.

        Raises:
            DirectoryUnavailable: If the snapshot cannot be read.
            InsufficientRelays: If the directory is too small. Nothing is sent.
            InvalidAddress: If the destination does not fit the address field.
            TransportError: If the entry relay cannot be reached.
            ProtocolError: If a relay on the path rejects its layer.
        """
        snapshot = self._snapshot()
        built = build_circuit(
            snapshot,
            self.config.user_address(destination_user_id),
            message,
            relay_address=lambda record: self.config.relay_address(record.relay_id),
            rng=self.rng,
        )

        self.last_sent_message = message
        self.last_circuit = built.circuit.relay_ids
        logger.info(
            "user %d sending %d chars to user %d via relays %s",
            self.user_id,
            len(message),
            destination_user_id,
            built.circuit.relay_ids,
        )

        await self.transport.send(built.entry_address, built.wire_message)
        return built

    async def receive_message(self, message: str) -> None:
        """Accept a message delivered by an exit relay."""
        self.last_received_message = message
        logger.info("user %d received %d chars", self.user_id, len(message))

    def status(self) -> str:
        return "live"
