"""In-memory relay registry."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from onionsim.crypto import InvalidKeyError, import_public_key
from onionsim.errors import AlreadyRegistered, InvalidInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RelayRecord:
    """A registered relay: its identifier and base64 SPKI public key."""

    relay_id: int
    public_key: str


@dataclass
class InMemoryDirectory:
    """Maps relay identifiers to public keys.

    Records are immutable once registered. ``list`` returns a copy, so a
    caller's snapshot never changes under it.
    """

    _records: dict[int, RelayRecord] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def register(self, relay_id: int, public_key: str) -> None:
        """Register one relay.

        Raises:
            InvalidInput: If ``relay_id`` is not a non-negative integer or
                ``public_key`` is not a base64 SPKI RSA key.
            AlreadyRegistered: If ``relay_id`` is taken.
        """

        if isinstance(relay_id, bool) or not isinstance(relay_id, int) or relay_id < 0:
            raise InvalidInput(f"relay_id must be a non-negative integer, got {relay_id!r}")
        if not isinstance(public_key, str) or not public_key:
            raise InvalidInput("public_key must be a non-empty string")
        try:
            import_public_key(public_key)
        except InvalidKeyError as e:
            raise InvalidInput(f"public_key of relay {relay_id} is not a valid RSA key") from e

        with self._lock:
            if relay_id in self._records:
                raise AlreadyRegistered(relay_id)
            self._records[relay_id] = RelayRecord(relay_id=relay_id, public_key=public_key)

        logger.info("registered relay %d", relay_id)

    def list(self) -> list[RelayRecord]:
        """Return a point-in-time snapshot of all relays."""

        with self._lock:
            return list(self._records.values())

    def get(self, relay_id: int) -> RelayRecord | None:
        with self._lock:
            return self._records.get(relay_id)

    def __len__(self) -> int:
        return len(self._records)

    def status(self) -> str:
        return "live"
