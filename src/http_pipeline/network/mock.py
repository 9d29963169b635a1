"""
Mock network implementations for testing.

This module provides in-memory NetworkStream and NetworkBackend
implementations so transports can be exercised without sockets.
"""

from typing import Any, Dict, List, Optional, Tuple

from .backend import NetworkBackend
from .stream import NetworkStream


class MockNetworkStream(NetworkStream):
    """
    Mock network stream for testing.
    
    Reads are served from a fixed buffer; writes are recorded.
    """
    
    def __init__(self, data: bytes = b"", read_size: Optional[int] = None):
        """
        Initialize the mock stream.
        
        Args:
            data: Data to be available for reading.
            read_size: Cap on bytes returned per read, to force partial reads.
        """
        self._data = data
        self._position = 0
        self._read_size = read_size
        self._closed = False
        self._extra_info: Dict[str, Any] = {}
        self._write_buffer: List[bytes] = []
    
    async def read(self, max_bytes: Optional[int] = None) -> bytes:
        if self._closed:
            raise RuntimeError("Stream is closed")
        
        if self._position >= len(self._data):
            return b""
        
        limit = max_bytes or len(self._data)
        if self._read_size is not None:
            limit = min(limit, self._read_size)
        end = min(self._position + limit, len(self._data))
        result = self._data[self._position:end]
        self._position = end
        return result
    
    async def write(self, data: bytes) -> None:
        if self._closed:
            raise RuntimeError("Stream is closed")
        
        self._write_buffer.append(data)
    
    async def aclose(self) -> None:
        """Close the mock stream."""
        self._closed = True
    
    def get_extra_info(self, name: str) -> Optional[Any]:
        return self._extra_info.get(name)
    
    @property
    def is_closed(self) -> bool:
        """Check if the mock stream is closed."""
        return self._closed
    
    @property
    def written_data(self) -> bytes:
        """Get all data that was written to the stream."""
        return b"".join(self._write_buffer)
    
    @property
    def write_count(self) -> int:
        """Get the number of write calls made."""
        return len(self._write_buffer)
    
    def set_extra_info(self, name: str, value: Any) -> None:
        self._extra_info[name] = value


class MockNetworkBackend(NetworkBackend):
    """
    Mock network backend for testing.
    
    Each connect() returns a fresh MockNetworkStream preloaded with the
    response registered for that host and port.
    """
    
    def __init__(self, read_size: Optional[int] = None):
        """Initialize the mock backend."""
        self._responses: Dict[Tuple[str, int], bytes] = {}
        self._errors: Dict[Tuple[str, int], Exception] = {}
        self._read_size = read_size
        self.connections: List[MockNetworkStream] = []
        self.connect_calls: List[Tuple[str, int, bool]] = []
    
    def add_response(self, host: str, port: int, data: bytes) -> None:
        """Register raw response bytes served for host and port."""
        self._responses[(host, port)] = data
    
    def add_error(self, host: str, port: int, error: Exception) -> None:
        """Make connecting to host and port raise error."""
        self._errors[(host, port)] = error
    
    async def connect(
        self,
        host: str,
        port: int,
        tls: bool = False,
        timeout: Optional[float] = None,
    ) -> MockNetworkStream:
        key = (host, port)
        self.connect_calls.append((host, port, tls))
        if key in self._errors:
            raise self._errors[key]
        
        stream = MockNetworkStream(self._responses.get(key, b""), self._read_size)
        stream.set_extra_info("peername", key)
        stream.set_extra_info("sockname", ("127.0.0.1", 12345))
        if tls:
            stream.set_extra_info("ssl_object", True)
        self.connections.append(stream)
        return stream
    
    @property
    def last_connection(self) -> Optional[MockNetworkStream]:
        return self.connections[-1] if self.connections else None
    
    def reset(self) -> None:
        """Reset all mock connections."""
        self._responses.clear()
        self._errors.clear()
        self.connections.clear()
        self.connect_calls.clear()
