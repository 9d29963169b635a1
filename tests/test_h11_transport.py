"""
Tests for the h11-based transport.

Exercises complete HTTP/1.1 exchanges against the in-memory network
backend.
"""

import asyncio

import pytest

from conftest import raw_http_response

from http_pipeline.exceptions import TransportError
from http_pipeline.h11_transport import H11Transport
from http_pipeline.network.mock import MockNetworkBackend, MockNetworkStream
from http_pipeline.transport import TransportInvoker
from http_pipeline.http_primitives import HTTPMethod, RequestDescriptor


def split_request(data: bytes):
    """Split written request bytes into lower-cased head and body."""
    head, _, body = data.partition(b"\r\n\r\n")
    return head.decode("latin-1").lower(), body


class TestH11Transport:
    """Test H11Transport functionality."""
    
    @pytest.fixture
    def transport(self, mock_backend):
        """Create a transport over the mock backend."""
        return H11Transport(backend=mock_backend, chunk_size=4)
    
    def test_defaults(self) -> None:
        """Test default configuration."""
        transport = H11Transport(backend=MockNetworkBackend())
        assert transport.timeout == H11Transport.DEFAULT_TIMEOUT
    
    @pytest.mark.asyncio
    async def test_get_request(self, transport, mock_backend) -> None:
        """Test a GET exchange end to end."""
        mock_backend.add_response("api.example.com", 443, raw_http_response(200, b'{"ok": true}'))
        
        outcome = await transport.execute(
            "GET", "https://api.example.com/items?q=shoes&page=2", {"Accept": "application/json"}
        )
        
        assert outcome.status_code == 200
        assert outcome.body == b'{"ok": true}'
        assert outcome.get_header("Content-Type") == "application/json"
        
        assert mock_backend.connect_calls == [("api.example.com", 443, True)]
        connection = mock_backend.last_connection
        assert connection.is_closed
        head, body = split_request(connection.written_data)
        assert head.startswith("get /items?q=shoes&page=2 http/1.1\r\n")
        assert "host: api.example.com\r\n" in head
        assert "accept: application/json\r\n" in head
        assert "connection: close" in head
        assert f"user-agent: {H11Transport.DEFAULT_USER_AGENT}" in head
        assert body == b""
    
    @pytest.mark.asyncio
    async def test_post_body_and_progress(self, transport, mock_backend) -> None:
        """Test the body is written in chunks with progress per chunk."""
        mock_backend.add_response("example.com", 8080, raw_http_response(201, b"{}"))
        events = []
        
        outcome = await transport.execute(
            "POST",
            "http://example.com:8080/upload",
            {"Content-Type": "application/json"},
            b"0123456789",
            events.append,
        )
        
        assert outcome.status_code == 201
        head, body = split_request(mock_backend.last_connection.written_data)
        assert head.startswith("post /upload http/1.1")
        assert "host: example.com:8080\r\n" in head
        assert "content-length: 10\r\n" in head
        assert body == b"0123456789"
        assert [e.bytes_sent for e in events] == [4, 8, 10]
        assert all(e.total_bytes == 10 for e in events)
    
    @pytest.mark.asyncio
    async def test_caller_connection_header_replaced(self, transport, mock_backend) -> None:
        """Test that connections are never kept alive."""
        mock_backend.add_response("example.com", 80, raw_http_response(204, b""))
        
        await transport.execute("DELETE", "http://example.com/x", {"Connection": "keep-alive"})
        
        head, _ = split_request(mock_backend.last_connection.written_data)
        assert "keep-alive" not in head
        assert "connection: close" in head
    
    @pytest.mark.asyncio
    async def test_partial_reads(self) -> None:
        """Test a response arriving in small pieces."""
        backend = MockNetworkBackend(read_size=3)
        body = b'{"items": [1, 2, 3]}'
        backend.add_response("example.com", 80, raw_http_response(200, body))
        
        outcome = await H11Transport(backend=backend).execute("GET", "http://example.com/", {})
        
        assert outcome.body == body
    
    @pytest.mark.asyncio
    async def test_close_delimited_body(self, transport, mock_backend) -> None:
        """Test a response without Content-Length ended by connection close."""
        mock_backend.add_response(
            "example.com", 80, b"HTTP/1.1 200 OK\r\nConnection: close\r\n\r\n[1, 2]"
        )
        
        outcome = await transport.execute("GET", "http://example.com/", {})
        
        assert outcome.body == b"[1, 2]"
    
    @pytest.mark.asyncio
    async def test_error_status_returned(self, transport, mock_backend) -> None:
        """Test that error statuses are returned, not raised."""
        mock_backend.add_response("example.com", 80, raw_http_response(404, b"missing", "Not Found"))
        
        outcome = await transport.execute("GET", "http://example.com/", {})
        
        assert outcome.status_code == 404
        assert outcome.body == b"missing"
    
    @pytest.mark.asyncio
    async def test_truncated_body(self, transport, mock_backend) -> None:
        """Test that a body shorter than Content-Length fails."""
        mock_backend.add_response(
            "example.com", 80, b"HTTP/1.1 200 OK\r\nContent-Length: 10\r\n\r\nabc"
        )
        
        with pytest.raises(TransportError):
            await transport.execute("GET", "http://example.com/", {})
        assert mock_backend.last_connection.is_closed
    
    @pytest.mark.asyncio
    async def test_no_response(self, transport, mock_backend) -> None:
        """Test that a connection closed without a response fails."""
        with pytest.raises(TransportError):
            await transport.execute("GET", "http://example.com/", {})
    
    @pytest.mark.asyncio
    async def test_garbage_response(self, transport, mock_backend) -> None:
        """Test that a malformed response fails as TransportError."""
        mock_backend.add_response("example.com", 80, b"NOT HTTP AT ALL\r\n\r\n")
        
        with pytest.raises(TransportError, match="protocol error"):
            await transport.execute("GET", "http://example.com/", {})
    
    @pytest.mark.asyncio
    async def test_connect_failure_through_invoker(self, transport, mock_backend) -> None:
        """Test that connection failures surface as TransportError."""
        mock_backend.add_error("example.com", 80, OSError("Connection refused"))
        descriptor = RequestDescriptor("http://example.com/", HTTPMethod.GET)
        
        with pytest.raises(TransportError, match="Connection refused"):
            await TransportInvoker(transport).execute(descriptor)
    
    @pytest.mark.asyncio
    async def test_timeout_through_invoker(self) -> None:
        """Test that a stalled server surfaces as TransportError."""
        
        class StalledStream(MockNetworkStream):
            async def read(self, max_bytes=None):
                await asyncio.sleep(10)
                return b""
        
        class StalledBackend(MockNetworkBackend):
            async def connect(self, host, port, tls=False, timeout=None):
                return StalledStream()
        
        transport = H11Transport(backend=StalledBackend(), timeout=0.05)
        descriptor = RequestDescriptor("http://example.com/", HTTPMethod.GET)
        
        with pytest.raises(TransportError, match="timed out"):
            await TransportInvoker(transport).execute(descriptor)
