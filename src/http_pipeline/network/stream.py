"""
Network stream interface for http_pipeline.

This module defines the NetworkStream interface that transports read
from and write to, so they can run over real sockets or in-memory fakes.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class NetworkStream(ABC):
    """
    Interface for network streams with async I/O operations.
    
    This interface defines the contract that all network stream implementations
    must follow. It provides methods for reading, writing, and closing a
    single connection.
    """
    
    @abstractmethod
    async def read(self, max_bytes: Optional[int] = None) -> bytes:
        """
        Read data from the stream.
        
        Args:
            max_bytes: Maximum number of bytes to read. If None, reads
                      whatever data is available.
        
        Returns:
            The data read from the stream, or b"" at end of stream.
        
        Raises:
            RuntimeError: If the stream is closed.
            OSError: If a network error occurs.
        """
        pass
    
    @abstractmethod
    async def write(self, data: bytes) -> None:
        """
        Write data to the stream.
        
        Args:
            data: The data to write to the stream.
        
        Raises:
            RuntimeError: If the stream is closed.
            OSError: If a network error occurs.
        """
        pass
    
    @abstractmethod
    async def aclose(self) -> None:
        """Close the stream and cleanup resources."""
        pass
    
    @abstractmethod
    def get_extra_info(self, name: str) -> Optional[Any]:
        """
        Get extra information about the stream.
        
        Args:
            name: The name of the information to retrieve, e.g.
                 "peername", "sockname" or "ssl_object".
        
        Returns:
            The requested information or None if not available.
        """
        pass
    
    @property
    @abstractmethod
    def is_closed(self) -> bool:
        """Check if the stream is closed."""
        pass
