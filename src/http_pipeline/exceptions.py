"""
Custom exceptions for http_pipeline.

This module defines the exception hierarchy used throughout
the pipeline. Every failure reaching the caller is one of these
classified errors; none is retried or downgraded to a default value.
"""

from typing import Optional


class PipelineError(Exception):
    """Base exception for all http_pipeline errors."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidURLError(PipelineError):
    """Raised when a URL cannot be parsed into a structured form."""
    
    def __init__(self, url: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Invalid URL: {url!r}", cause)
        self.url = url


class InvalidHTTPMethodError(PipelineError):
    """Raised when a method is unknown or not allowed for the operation."""
    
    def __init__(self, method: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Invalid HTTP method: {method}", cause)
        self.method = method


class EncodingError(PipelineError):
    """Raised when parameters are not representable in the chosen encoding."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Encoding error: {message}", cause)


class TransportError(PipelineError):
    """Raised when the transport fails (DNS, connection, TLS, timeout, cancel)."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Transport error: {message}", cause)


class InvalidStatusCodeError(PipelineError):
    """Raised when the response status is outside the success range."""
    
    def __init__(self, status_code: int, body: bytes = b"") -> None:
        super().__init__(f"Invalid status code: {status_code}")
        self.status_code = status_code
        self.body = body


class DecodingError(PipelineError):
    """Raised when a response body cannot be decoded into the result type."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Decoding error: {message}", cause)
