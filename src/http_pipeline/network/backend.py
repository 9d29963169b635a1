"""
Network backend interface for http_pipeline.

This module defines the NetworkBackend interface that opens the single
connection a transport uses for one request.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .stream import NetworkStream


class NetworkBackend(ABC):
    """
    Interface for network backend implementations.
    
    A backend opens plain TCP or TLS connections. It keeps no pool;
    every call returns a new stream owned by the caller.
    """
    
    @abstractmethod
    async def connect(
        self,
        host: str,
        port: int,
        tls: bool = False,
        timeout: Optional[float] = None,
    ) -> NetworkStream:
        """
        Connect to a TCP endpoint, optionally wrapped in TLS.
        
        Args:
            host: The hostname or IP address to connect to.
            port: The port number to connect to.
            tls: Whether to negotiate TLS with hostname verification.
            timeout: Optional timeout in seconds for the connection.
        
        Returns:
            A NetworkStream representing the connection.
        
        Raises:
            OSError: If the connection fails.
            asyncio.TimeoutError: If the connection times out.
        """
        pass
