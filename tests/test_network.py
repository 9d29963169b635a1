"""
Tests for the network layer.

Covers the in-memory mock and the asyncio backend against a local
loopback server.
"""

import asyncio

import pytest

from conftest import raw_http_response

from http_pipeline.h11_transport import H11Transport
from http_pipeline.network import AsyncioNetworkBackend, MockNetworkBackend, MockNetworkStream


class TestMockNetworkStream:
    """Test MockNetworkStream functionality."""
    
    @pytest.mark.asyncio
    async def test_read_write(self) -> None:
        """Test reading canned data and recording writes."""
        stream = MockNetworkStream(b"hello world", read_size=5)
        
        assert await stream.read() == b"hello"
        assert await stream.read(3) == b" wo"
        assert await stream.read() == b"rld"
        assert await stream.read() == b""
        
        await stream.write(b"abc")
        await stream.write(b"def")
        assert stream.written_data == b"abcdef"
        assert stream.write_count == 2
    
    @pytest.mark.asyncio
    async def test_closed(self) -> None:
        """Test that a closed stream rejects I/O."""
        stream = MockNetworkStream()
        await stream.aclose()
        
        assert stream.is_closed
        with pytest.raises(RuntimeError):
            await stream.read()
        with pytest.raises(RuntimeError):
            await stream.write(b"x")


class TestMockNetworkBackend:
    """Test MockNetworkBackend functionality."""
    
    @pytest.mark.asyncio
    async def test_fresh_stream_per_connect(self) -> None:
        """Test that every connect returns a new stream."""
        backend = MockNetworkBackend()
        backend.add_response("example.com", 443, b"data")
        
        first = await backend.connect("example.com", 443, tls=True)
        second = await backend.connect("example.com", 443, tls=True)
        
        assert first is not second
        assert await second.read() == b"data"
        assert first.get_extra_info("ssl_object") is True
        assert backend.connect_calls == [("example.com", 443, True)] * 2
        
        backend.reset()
        assert backend.last_connection is None


class TestAsyncioNetworkBackend:
    """Test the asyncio backend over loopback."""
    
    @pytest.mark.asyncio
    async def test_exchange_over_loopback(self) -> None:
        """Test a full request against a local server."""
        received = []
        
        async def handle(reader, writer):
            head = await reader.readuntil(b"\r\n\r\n")
            length = 0
            for line in head.split(b"\r\n"):
                if line.lower().startswith(b"content-length:"):
                    length = int(line.split(b":", 1)[1])
            body = await reader.readexactly(length)
            received.append((head, body))
            writer.write(raw_http_response(200, b'{"ok": true}'))
            await writer.drain()
            writer.close()
        
        server = await asyncio.start_server(handle, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        
        try:
            transport = H11Transport(backend=AsyncioNetworkBackend(), timeout=5.0)
            outcome = await transport.execute(
                "POST", f"http://127.0.0.1:{port}/echo", {}, b"payload"
            )
        finally:
            server.close()
            await server.wait_closed()
        
        assert outcome.status_code == 200
        assert outcome.body == b'{"ok": true}'
        head, body = received[0]
        assert head.startswith(b"POST /echo HTTP/1.1\r\n")
        assert body == b"payload"
    
    @pytest.mark.asyncio
    async def test_connection_refused(self) -> None:
        """Test that connecting to a closed port raises OSError."""
        server = await asyncio.start_server(lambda r, w: None, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        server.close()
        await server.wait_closed()
        
        with pytest.raises(OSError):
            await AsyncioNetworkBackend().connect("127.0.0.1", port, timeout=5.0)
