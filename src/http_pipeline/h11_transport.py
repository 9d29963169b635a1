"""
HTTP/1.1 transport for http_pipeline.

This module implements the default Transport on top of h11. Each call
opens one connection, sends a single request with "Connection: close",
reads the complete response and closes the connection again.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Tuple

import h11

from .exceptions import TransportError
from .http_primitives import ResponseOutcome, URLComponents
from .network import AsyncioNetworkBackend, NetworkBackend, NetworkStream
from .streams import ProgressCallback, ProgressRequestStream
from .transport import Transport

logger = logging.getLogger(__name__)


class H11Transport(Transport):
    """
    Transport performing one HTTP/1.1 exchange per connection.
    
    Safe for concurrent use: calls share no connection state.
    """
    
    # Default configuration
    DEFAULT_TIMEOUT = 30.0  # 30 seconds for the whole exchange
    DEFAULT_CHUNK_SIZE = 65536  # 64KB body slices
    DEFAULT_USER_AGENT = "http_pipeline/0.1.0"
    
    def __init__(
        self,
        backend: Optional[NetworkBackend] = None,
        timeout: Optional[float] = None,
        chunk_size: Optional[int] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize the transport.
        
        Args:
            backend: NetworkBackend used to open connections
            timeout: Timeout for a complete exchange in seconds
            chunk_size: Size of body slices written per progress event
            user_agent: User-Agent header sent when the caller sets none
        """
        self._backend = backend or AsyncioNetworkBackend()
        self._timeout = timeout or self.DEFAULT_TIMEOUT
        self._chunk_size = chunk_size or self.DEFAULT_CHUNK_SIZE
        self._user_agent = user_agent or self.DEFAULT_USER_AGENT
    
    @property
    def timeout(self) -> float:
        return self._timeout
    
    async def execute(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ResponseOutcome:
        components = URLComponents.from_url(url)
        return await asyncio.wait_for(
            self._exchange(method, components, headers, body, on_progress),
            timeout=self._timeout,
        )
    
    def _build_headers(
        self,
        components: URLComponents,
        headers: Dict[str, str],
        body: Optional[bytes],
    ) -> List[Tuple[str, str]]:
        present = {name.lower() for name in headers}
        wire_headers = []
        if "host" not in present:
            wire_headers.append(("Host", components.host_header))
        if "user-agent" not in present:
            wire_headers.append(("User-Agent", self._user_agent))
        if body is not None and "content-length" not in present:
            wire_headers.append(("Content-Length", str(len(body))))
        wire_headers.extend(
            (name, value) for name, value in headers.items()
            if name.lower() != "connection"
        )
        wire_headers.append(("Connection", "close"))
        return wire_headers
    
    async def _exchange(
        self,
        method: str,
        components: URLComponents,
        headers: Dict[str, str],
        body: Optional[bytes],
        on_progress: Optional[ProgressCallback],
    ) -> ResponseOutcome:
        stream = await self._backend.connect(
            components.host,
            components.port,
            tls=components.is_tls,
            timeout=self._timeout,
        )
        connection = h11.Connection(h11.CLIENT)
        
        try:
            request = h11.Request(
                method=method,
                target=components.target,
                headers=self._build_headers(components, headers, body),
            )
            await self._send_event(connection, stream, request)
            
            if body is not None:
                request_stream = ProgressRequestStream(body, on_progress, self._chunk_size)
                try:
                    async for chunk in request_stream:
                        await self._send_event(connection, stream, h11.Data(data=chunk))
                finally:
                    await request_stream.aclose()
            
            await self._send_event(connection, stream, h11.EndOfMessage())
            return await self._receive_response(connection, stream)
        
        except h11.ProtocolError as e:
            raise TransportError(f"HTTP protocol error: {e}", cause=e) from e
        
        finally:
            await stream.aclose()
    
    async def _send_event(
        self,
        connection: h11.Connection,
        stream: NetworkStream,
        event: h11.Event,
    ) -> None:
        data = connection.send(event)
        if data:
            await stream.write(data)
    
    async def _next_event(self, connection: h11.Connection, stream: NetworkStream):
        eof = False
        while True:
            event = connection.next_event()
            if event is not h11.NEED_DATA:
                return event
            
            if eof:
                raise TransportError("Connection closed unexpectedly")
            data = await stream.read(self._chunk_size)
            if not data:
                eof = True
            connection.receive_data(data)
    
    async def _receive_response(
        self,
        connection: h11.Connection,
        stream: NetworkStream,
    ) -> ResponseOutcome:
        while True:
            event = await self._next_event(connection, stream)
            if isinstance(event, h11.Response):
                break
            if isinstance(event, h11.ConnectionClosed):
                raise TransportError("Connection closed by server")
            # InformationalResponse (1xx) is skipped
        
        chunks = []
        while True:
            body_event = await self._next_event(connection, stream)
            if isinstance(body_event, h11.Data):
                chunks.append(bytes(body_event.data))
            elif isinstance(body_event, h11.EndOfMessage):
                break
            elif isinstance(body_event, h11.ConnectionClosed):
                raise TransportError("Connection closed before end of body")
        
        response_headers = tuple(
            (name.decode("latin-1"), value.decode("latin-1"))
            for name, value in event.headers
        )
        logger.debug(f"Received {event.status_code} with {sum(map(len, chunks))} body bytes")
        return ResponseOutcome(
            status_code=event.status_code,
            body=b"".join(chunks),
            headers=response_headers,
        )
