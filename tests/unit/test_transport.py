"""Unit tests for onionsim.transport module."""

import pytest

from onionsim.transport import LocalTransport, TransportError, TransportStats, UnknownAddress


class TestTransportStats:
    """Test TransportStats dataclass."""

    def test_defaults(self):
        stats = TransportStats()
        assert stats.messages_sent == 0
        assert stats.messages_failed == 0
        assert stats.bytes_sent == 0


class TestLocalTransport:
    """Test in-memory transport."""

    @pytest.fixture
    def transport(self):
        return LocalTransport()

    def test_bind_and_unbind(self, transport):
        async def handler(message):
            return None

        transport.bind(4000, handler)
        assert transport.is_bound(4000)
        transport.unbind(4000)
        assert not transport.is_bound(4000)
        transport.unbind(4000)

    def test_bind_twice(self, transport):
        async def handler(message):
            return None

        transport.bind(4000, handler)
        with pytest.raises(TransportError):
            transport.bind(4000, handler)

    @pytest.mark.asyncio
    async def test_send(self, transport):
        received = []

        async def handler(message):
            received.append(message)

        transport.bind(3000, handler)
        await transport.send(3000, "hello")

        assert received == ["hello"]
        assert transport.stats.messages_sent == 1
        assert transport.stats.bytes_sent == 5

    @pytest.mark.asyncio
    async def test_unknown_address(self, transport):
        with pytest.raises(UnknownAddress) as excinfo:
            await transport.send(1234, "hello")
        assert excinfo.value.address == 1234
        assert isinstance(excinfo.value, TransportError)
        assert transport.stats.messages_failed == 1

    @pytest.mark.asyncio
    async def test_handler_error_reaches_sender(self, transport):
        """Test that a receiver failure is reported back, not retried."""
        calls = []

        async def handler(message):
            calls.append(message)
            raise RuntimeError("boom")

        transport.bind(3000, handler)
        with pytest.raises(RuntimeError):
            await transport.send(3000, "hello")

        assert calls == ["hello"]
        assert transport.stats.messages_failed == 1
        assert transport.stats.messages_sent == 0
