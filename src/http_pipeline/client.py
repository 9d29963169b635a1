"""
High-level HTTP client for http_pipeline.

This module wires the request builder, transport invoker and response
resolver into the two public entry points: request() for parameterized
calls and upload_request() for binary uploads.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

from .envelope import DataResponse
from .h11_transport import H11Transport
from .http_primitives import (
    ContentType,
    HTTPMethod,
    ParameterSet,
    UploadFraming,
    UploadPayload,
)
from .request_builder import build_request, build_upload_request
from .resolver import resolve
from .streams import ProgressCallback
from .transport import Transport, TransportInvoker

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HTTPClient:
    """
    HTTP client returning typed results.
    
    The client holds no per-request state, so one instance can serve
    any number of concurrent calls as long as its transport can.
    """
    
    def __init__(
        self,
        transport: Optional[Transport] = None,
        default_headers: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize the client.
        
        Args:
            transport: Transport to execute requests with; an H11Transport
                      is created when omitted
            default_headers: Headers sent with every request unless
                            overridden per call
        """
        if transport is None:
            transport = H11Transport()
        
        self._invoker = TransportInvoker(transport)
        self._default_headers = dict(default_headers or {})
    
    @property
    def transport(self) -> Transport:
        return self._invoker.transport
    
    def _headers(self, headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
        if not headers:
            return dict(self._default_headers)
        
        overridden = {name.lower() for name in headers}
        merged = {
            name: value for name, value in self._default_headers.items()
            if name.lower() not in overridden
        }
        merged.update(headers)
        return merged
    
    async def request(
        self,
        url: str,
        result_type: Type[T],
        method: Union[HTTPMethod, str] = HTTPMethod.GET,
        parameters: Optional[ParameterSet] = None,
        content_type: Union[ContentType, str] = ContentType.JSON,
        headers: Optional[Mapping[str, str]] = None,
    ) -> T:
        """
        Perform a request and decode the response.
        
        Args:
            url: Absolute http(s) URL
            result_type: Type the JSON response body is decoded into
            method: HTTP method
            parameters: Optional parameters, sent as query items for GET
                       and as an encoded body otherwise
            content_type: Content type selecting the body encoding
            headers: Optional request headers
        
        Returns:
            The decoded result
        
        Raises:
            PipelineError: One of the classified pipeline errors
        """
        descriptor = build_request(
            url,
            method,
            parameters=parameters,
            content_type=content_type,
            headers=self._headers(headers),
        )
        logger.debug(f"Request {descriptor.method.value} {descriptor.url}")
        outcome = await self._invoker.execute(descriptor)
        return resolve(outcome, result_type)
    
    async def request_data(
        self,
        url: str,
        result_type: Type[T],
        method: Union[HTTPMethod, str] = HTTPMethod.GET,
        parameters: Optional[ParameterSet] = None,
        content_type: Union[ContentType, str] = ContentType.JSON,
        headers: Optional[Mapping[str, str]] = None,
    ) -> T:
        """Like request(), for bodies wrapped as {"data": ...}; returns data."""
        envelope: Any = await self.request(
            url,
            DataResponse[result_type],  # type: ignore[valid-type]
            method=method,
            parameters=parameters,
            content_type=content_type,
            headers=headers,
        )
        return envelope.data
    
    async def upload_request(
        self,
        url: str,
        result_type: Type[T],
        payload: UploadPayload,
        method: Union[HTTPMethod, str] = HTTPMethod.POST,
        framing: UploadFraming = UploadFraming.MULTIPART_FORM_DATA,
        headers: Optional[Mapping[str, str]] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> T:
        """
        Upload a binary payload and decode the response.
        
        Args:
            url: Absolute http(s) URL
            result_type: Type the JSON response body is decoded into
            payload: The payload to upload
            method: POST, PUT or PATCH
            framing: Raw binary or multipart/form-data framing
            headers: Optional request headers
            on_progress: Optional callback receiving ProgressEvent while
                        the body is sent; it may run concurrently with
                        other tasks and must do its own synchronization
        
        Returns:
            The decoded result
        
        Raises:
            InvalidHTTPMethodError: If method is not POST, PUT or PATCH
            PipelineError: Any other classified pipeline error
        """
        descriptor = build_upload_request(
            url,
            method,
            payload,
            framing=framing,
            headers=self._headers(headers),
        )
        logger.debug(
            f"Upload {descriptor.method.value} {descriptor.url} "
            f"({len(descriptor.body or b'')} bytes, {framing.value})"
        )
        outcome = await self._invoker.execute(descriptor, on_progress)
        return resolve(outcome, result_type)
