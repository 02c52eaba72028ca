#!/usr/bin/env python3
"""Send one message through a simulated onion network.

Starts a directory with five relays and two users, sends a message from user
0 to user 1, and prints what each relay on the circuit observed.
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add the parent directory to the path so we can import onionsim
sys.path.insert(0, str(Path(__file__).parent.parent))

from onionsim.config import Config
from onionsim.log import configure_logging
from onionsim.network import launch_network


async def send_example(message: str) -> None:
    """Run one send and show the per-hop state."""
    config = Config.from_environment()
    print(f"1. Launching network (relays on {config.ports.base_onion_router_port}+n, "
          f"users on {config.ports.base_user_port}+n)...")
    network = launch_network(5, 2, config=config)
    print(f"   ✓ {len(network.directory.list())} relays registered")

    print("\n2. Sending message from user 0 to user 1...")
    built = await network.user(0).send_message(message, 1)
    print(f"   ✓ Circuit: {built.circuit.relay_ids}")
    print(f"   ✓ Wire message: {len(built.wire_message)} chars")

    print("\n3. Per-hop observations...")
    for relay_id in built.circuit.relay_ids:
        relay = network.relay(relay_id)
        print(
            f"   relay {relay_id}: in {len(relay.last_received_encrypted_message)} chars, "
            f"out {len(relay.last_received_decrypted_message)} chars "
            f"-> {relay.last_message_destination}"
        )

    print(f"\n4. User 1 received: {network.user(1).last_received_message!r}")


if __name__ == "__main__":
    configure_logging(logging.INFO)
    asyncio.run(send_example(" ".join(sys.argv[1:]) or "hello"))
