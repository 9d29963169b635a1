"""
Request building for http_pipeline.

This module composes validated URLs, methods, headers and encoded
bodies into immutable RequestDescriptor instances. Nothing here
touches the network.
"""

from typing import Mapping, Optional, Union
from urllib.parse import urlsplit

from .encoding import encode_body, encode_query, select_encoding
from .exceptions import InvalidHTTPMethodError, InvalidURLError
from .http_primitives import (
    UPLOAD_METHODS,
    ContentType,
    Headers,
    HTTPMethod,
    ParameterSet,
    RequestDescriptor,
    UploadFraming,
    UploadPayload,
)
from .multipart import build_upload_body

CONTENT_TYPE = "Content-Type"
ALLOWED_SCHEMES = ("http", "https")


def coerce_method(method: Union[HTTPMethod, str]) -> HTTPMethod:
    """
    Convert a method name to an HTTPMethod.
    
    Raises:
        InvalidHTTPMethodError: If the name is not a supported method
    """
    if isinstance(method, HTTPMethod):
        return method
    
    try:
        return HTTPMethod(str(method).upper())
    except ValueError as e:
        raise InvalidHTTPMethodError(str(method), cause=e) from e


def validate_url(url: str) -> str:
    """
    Check that a URL parses into scheme, host and optional port.
    
    Returns:
        The URL unchanged
        
    Raises:
        InvalidURLError: If the URL is not an absolute http(s) URL
    """
    if not isinstance(url, str) or not url or any(c.isspace() for c in url):
        raise InvalidURLError(str(url))
    
    try:
        parsed = urlsplit(url)
        # Accessing port validates it
        parsed.port
    except ValueError as e:
        raise InvalidURLError(url, cause=e) from e
    
    if parsed.scheme.lower() not in ALLOWED_SCHEMES or not parsed.hostname:
        raise InvalidURLError(url)
    
    return url


def merge_headers(
    headers: Optional[Mapping[str, str]],
    content_type: Optional[str] = None,
) -> Headers:
    """
    Merge caller headers with an encoder-set Content-Type.
    
    The Content-Type written by the encoder replaces any caller header
    of the same name, regardless of case.
    """
    merged = dict(headers or {})
    if content_type is not None:
        merged = {
            name: value for name, value in merged.items()
            if name.lower() != CONTENT_TYPE.lower()
        }
        merged[CONTENT_TYPE] = content_type
    
    return tuple((str(name), str(value)) for name, value in merged.items())


def build_request(
    url: str,
    method: Union[HTTPMethod, str] = HTTPMethod.GET,
    parameters: Optional[ParameterSet] = None,
    content_type: Union[ContentType, str] = ContentType.JSON,
    headers: Optional[Mapping[str, str]] = None,
) -> RequestDescriptor:
    """
    Build a descriptor for a parameterized request.
    
    GET parameters become query items; for any other method they are
    encoded into the body and the Content-Type header is set to the
    encoding's media type.
    
    Args:
        url: Absolute http(s) URL
        method: HTTP method
        parameters: Optional parameter set
        content_type: Declared content type selecting the body encoding
        headers: Optional caller headers
        
    Returns:
        New RequestDescriptor instance
        
    Raises:
        InvalidURLError: If the URL is malformed
        InvalidHTTPMethodError: If the method is not supported
        EncodingError: If the parameters cannot be encoded
    """
    url = validate_url(url)
    method = coerce_method(method)
    
    if parameters is None:
        return RequestDescriptor(url=url, method=method, headers=merge_headers(headers))
    
    if method is HTTPMethod.GET:
        return RequestDescriptor(
            url=url,
            method=method,
            query_parameters=encode_query(parameters),
            headers=merge_headers(headers),
        )
    
    encoding = select_encoding(content_type)
    return RequestDescriptor(
        url=url,
        method=method,
        headers=merge_headers(headers, encoding.media_type),
        body=encode_body(parameters, encoding),
        content_type=encoding.media_type,
    )


def build_upload_request(
    url: str,
    method: Union[HTTPMethod, str],
    payload: UploadPayload,
    framing: UploadFraming = UploadFraming.MULTIPART_FORM_DATA,
    headers: Optional[Mapping[str, str]] = None,
) -> RequestDescriptor:
    """
    Build a descriptor for a binary upload.
    
    Raises:
        InvalidURLError: If the URL is malformed
        InvalidHTTPMethodError: If the method is not POST, PUT or PATCH
    """
    url = validate_url(url)
    method = coerce_method(method)
    if method not in UPLOAD_METHODS:
        raise InvalidHTTPMethodError(method.value)
    
    body, content_type = build_upload_body(payload, framing)
    return RequestDescriptor(
        url=url,
        method=method,
        headers=merge_headers(headers, content_type),
        body=body,
        content_type=content_type,
    )
