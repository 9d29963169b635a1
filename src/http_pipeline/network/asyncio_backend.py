"""
asyncio network backend for http_pipeline.

Connections are opened with asyncio.open_connection; TLS uses a
default SSL context with certificate and hostname verification.
"""

import asyncio
import ssl
from typing import Any, Optional

from .backend import NetworkBackend
from .stream import NetworkStream


class AsyncioNetworkStream(NetworkStream):
    """NetworkStream over an asyncio reader/writer pair."""
    
    DEFAULT_READ_SIZE = 65536
    
    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self._reader = reader
        self._writer = writer
        self._closed = False
    
    async def read(self, max_bytes: Optional[int] = None) -> bytes:
        if self._closed:
            raise RuntimeError("Stream is closed")
        return await self._reader.read(max_bytes or self.DEFAULT_READ_SIZE)
    
    async def write(self, data: bytes) -> None:
        if self._closed:
            raise RuntimeError("Stream is closed")
        self._writer.write(data)
        await self._writer.drain()
    
    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._writer.close()
        try:
            await self._writer.wait_closed()
        except (OSError, ssl.SSLError):
            # Peer may already have dropped the connection
            pass
    
    def get_extra_info(self, name: str) -> Optional[Any]:
        return self._writer.get_extra_info(name)
    
    @property
    def is_closed(self) -> bool:
        return self._closed


class AsyncioNetworkBackend(NetworkBackend):
    """NetworkBackend built on asyncio streams."""
    
    def __init__(self, ssl_context: Optional[ssl.SSLContext] = None) -> None:
        """
        Initialize the backend.
        
        Args:
            ssl_context: SSL context for TLS connections; a default
                        verifying context is created when omitted.
        """
        self._ssl_context = ssl_context
    
    def _get_ssl_context(self) -> ssl.SSLContext:
        if self._ssl_context is None:
            self._ssl_context = ssl.create_default_context()
            self._ssl_context.set_alpn_protocols(["http/1.1"])
        return self._ssl_context
    
    async def connect(
        self,
        host: str,
        port: int,
        tls: bool = False,
        timeout: Optional[float] = None,
    ) -> AsyncioNetworkStream:
        ssl_context = self._get_ssl_context() if tls else None
        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(
                host,
                port,
                ssl=ssl_context,
                server_hostname=host if tls else None,
            ),
            timeout=timeout,
        )
        return AsyncioNetworkStream(reader, writer)
