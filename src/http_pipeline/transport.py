"""
Transport invocation for http_pipeline.

This module defines the Transport interface the pipeline calls through
and the TransportInvoker that hands descriptors to it, wires progress
callbacks and classifies transport failures.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional

from .exceptions import PipelineError, TransportError
from .http_primitives import ProgressEvent, RequestDescriptor, ResponseOutcome
from .streams import ProgressCallback

logger = logging.getLogger(__name__)


class Transport(ABC):
    """
    Interface for transport implementations.
    
    A transport performs one HTTP exchange per call. Implementations
    must be safe for concurrent calls and must not retry.
    """
    
    @abstractmethod
    async def execute(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ResponseOutcome:
        """
        Send a request and return the complete response.
        
        Args:
            method: HTTP method name
            url: Absolute URL including the query string
            headers: Request headers
            body: Optional request body
            on_progress: Optional callback for body transmission progress
        
        Returns:
            ResponseOutcome with status code, body and headers.
        
        Raises:
            OSError: If a network error occurs.
            asyncio.TimeoutError: If the exchange times out.
        """
        pass


class _ProgressRelay:
    """Forwards progress events until detached."""
    
    def __init__(self, callback: ProgressCallback) -> None:
        self._callback: Optional[ProgressCallback] = callback
        self._last_sent = 0
    
    def __call__(self, event: ProgressEvent) -> None:
        callback = self._callback
        if callback is None:
            return
        # Keep reported byte counts non-decreasing
        if event.bytes_sent < self._last_sent:
            event = ProgressEvent(self._last_sent, event.total_bytes)
        self._last_sent = event.bytes_sent
        callback(event)
    
    def detach(self) -> None:
        self._callback = None


class TransportInvoker:
    """
    Executes request descriptors through a Transport.
    
    Any failure that is not already a PipelineError, including
    cancellation, is surfaced as TransportError.
    """
    
    def __init__(self, transport: Transport) -> None:
        self._transport = transport
    
    @property
    def transport(self) -> Transport:
        return self._transport
    
    async def execute(
        self,
        descriptor: RequestDescriptor,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ResponseOutcome:
        """
        Execute one request.
        
        Args:
            descriptor: The request to send
            on_progress: Optional upload progress callback
            
        Returns:
            The raw ResponseOutcome
            
        Raises:
            TransportError: If the transport fails or the call is cancelled
        """
        relay = _ProgressRelay(on_progress) if on_progress is not None else None
        method = descriptor.method.value
        url = descriptor.full_url
        start_time = time.monotonic()
        
        try:
            outcome = await self._transport.execute(
                method,
                url,
                descriptor.header_dict(),
                descriptor.body,
                relay,
            )
        except PipelineError:
            raise
        except asyncio.CancelledError as e:
            logger.error(f"{method} {url} cancelled")
            raise TransportError("request cancelled", cause=e) from e
        except asyncio.TimeoutError as e:
            logger.error(f"{method} {url} timed out")
            raise TransportError("request timed out", cause=e) from e
        except Exception as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportError(str(e) or type(e).__name__, cause=e) from e
        finally:
            if relay is not None:
                relay.detach()
        
        if not isinstance(outcome, ResponseOutcome):
            raise TransportError(
                f"transport returned {type(outcome).__name__}, expected ResponseOutcome"
            )
        
        duration = time.monotonic() - start_time
        logger.debug(f"{method} {url} -> {outcome.status_code} ({duration:.3f}s)")
        return outcome
