"""Relay node of the simulated overlay."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from onionsim.config import Config
from onionsim.crypto import RsaKeyPair, generate_rsa_keypair
from onionsim.directory import RelayDirectory
from onionsim.errors import ProtocolError
from onionsim.transport import Transport

from .peeler import PeelResult, peel

logger = logging.getLogger(__name__)


@dataclass
class RelayObservations:
    """What a relay last handled. Kept for verification only."""

    last_received_encrypted_message: Optional[str] = None
    last_received_decrypted_message: Optional[str] = None
    last_message_destination: Optional[int] = None


class OnionRouter:
    """
    A relay: holds one RSA key pair, peels one layer per incoming message and
    forwards the remainder.

    The key pair is generated at construction and never leaves the instance
    except through :meth:`export_private_key`.
    """

    def __init__(
        self,
        relay_id: int,
        directory: RelayDirectory,
        transport: Transport,
        config: Optional[Config] = None,
        keypair: Optional[RsaKeyPair] = None,
    ) -> None:
        """
        Initialize a relay.

        Args:
            relay_id: Identifier registered in the directory.
            directory: Directory to register the public key with.
            transport: Transport used to forward peeled messages.
            config: Port layout. Uses defaults if None.
            keypair: Pre-generated key pair, mostly for tests.
        """
        self.relay_id = relay_id
        self.config = config or Config()
        self.directory = directory
        self.transport = transport
        self._keypair = keypair or generate_rsa_keypair()
        self.observations = RelayObservations()
        self._registered = False

    @property
    def address(self) -> int:
        return self.config.relay_address(self.relay_id)

    @property
    def public_key(self) -> str:
        return self._keypair.export_public_key()

    def register(self) -> None:
        """Publish this relay's public key in the directory.

        Raises:
            AlreadyRegistered: If the identifier is taken.
        """
        self.directory.register(self.relay_id, self.public_key)
        self._registered = True
        logger.info("relay %d registered, listening on %d", self.relay_id, self.address)

    @property
    def is_registered(self) -> bool:
        return self._registered

    def peel(self, message: str) -> PeelResult:
        """Remove this relay's layer without forwarding."""
        return peel(self._keypair, message)

    async def receive_message(self, message: str) -> None:
        """
        Handle one incoming wire message.

        Peels a layer, records it, and forwards the remaining payload to the
        next hop. Nothing is recorded or forwarded if peeling fails.

        Raises:
            ProtocolError: If the layer cannot be removed.
            TransportError: If the next hop cannot be reached.
        """
        try:
            result = self.peel(message)
        except ProtocolError as e:
            logger.warning("relay %d rejected a %d-char message: %s", self.relay_id, len(message), e)
            raise

        self.observations = RelayObservations(
            last_received_encrypted_message=message,
            last_received_decrypted_message=result.remaining_payload,
            last_message_destination=result.next_hop_address,
        )
        logger.debug(
            "relay %d peeled %d chars, forwarding %d chars to %d",
            self.relay_id,
            len(message),
            len(result.remaining_payload),
            result.next_hop_address,
        )
        await self.transport.send(result.next_hop_address, result.remaining_payload)

    def export_private_key(self) -> str:
        """Base64 PKCS#8 private key. Only for verification in tests."""
        return self._keypair.export_private_key()

    def status(self) -> str:
        return "live"

    @property
    def last_received_encrypted_message(self) -> Optional[str]:
        return self.observations.last_received_encrypted_message

    @property
    def last_received_decrypted_message(self) -> Optional[str]:
        return self.observations.last_received_decrypted_message

    @property
    def last_message_destination(self) -> Optional[int]:
        return self.observations.last_message_destination
