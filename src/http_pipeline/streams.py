"""
Request body streaming for http_pipeline.

This module provides the request body stream used by transports. It
slices a body into chunks and reports upload progress after each chunk
is consumed, so progress follows what the transport actually wrote.
"""

from typing import AsyncIterator, Callable, Optional

from .exceptions import TransportError
from .http_primitives import ProgressEvent

ProgressCallback = Callable[[ProgressEvent], None]


class ProgressRequestStream:
    """
    Stream for upload request bodies with progress reporting.
    
    The callback runs in the consumer's context each time the next
    chunk is requested, i.e. after the previous chunk was written. It
    receives non-decreasing byte counts and is detached on aclose().
    """
    
    DEFAULT_CHUNK_SIZE = 65536
    
    def __init__(
        self,
        data: bytes,
        on_progress: Optional[ProgressCallback] = None,
        chunk_size: Optional[int] = None,
    ) -> None:
        """
        Initialize ProgressRequestStream.
        
        Args:
            data: The body to stream
            on_progress: Optional callback receiving ProgressEvent
            chunk_size: Maximum chunk size in bytes
        """
        if not isinstance(data, bytes):
            raise ValueError("data must be bytes")
        
        chunk_size = chunk_size or self.DEFAULT_CHUNK_SIZE
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        
        self._data = data
        self._on_progress = on_progress
        self._chunk_size = chunk_size
        self._bytes_sent = 0
        self._closed = False
    
    def __aiter__(self) -> AsyncIterator[bytes]:
        """Iterate over body chunks."""
        if self._closed:
            raise TransportError("Cannot iterate over closed stream")
        return self._iter_chunks()
    
    async def _iter_chunks(self) -> AsyncIterator[bytes]:
        total = len(self._data)
        for offset in range(0, total, self._chunk_size):
            if self._closed:
                return
            chunk = self._data[offset:offset + self._chunk_size]
            yield chunk
            self._bytes_sent += len(chunk)
            self._notify()
    
    def _notify(self) -> None:
        if self._on_progress is not None:
            self._on_progress(ProgressEvent(self._bytes_sent, len(self._data)))
    
    async def aread(self) -> bytes:
        """Read the entire body, reporting progress per chunk."""
        if self._closed:
            raise TransportError("Cannot read from closed stream")
        
        chunks = []
        async for chunk in self:
            chunks.append(chunk)
        return b"".join(chunks)
    
    async def aclose(self) -> None:
        """Close the stream and detach the progress callback."""
        self._closed = True
        self._on_progress = None
    
    @property
    def content_length(self) -> int:
        """Get the content length of the stream."""
        return len(self._data)
    
    @property
    def bytes_sent(self) -> int:
        """Get the number of bytes consumed so far."""
        return self._bytes_sent
    
    @property
    def closed(self) -> bool:
        """Get whether the stream is closed."""
        return self._closed
