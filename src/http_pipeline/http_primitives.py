"""
HTTP primitives for http_pipeline.

This module defines the core data structures that flow through the
pipeline: request descriptors, upload payloads, response outcomes and
progress events. Descriptors and payloads are immutable so they can be
handed to a transport without defensive copies.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Dict,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
    Union,
)
from urllib.parse import urlencode, urlsplit

from typing_extensions import TypeAlias


# Type aliases for better readability
ParameterValue: TypeAlias = Union[str, int, float, bool]
ParameterSet: TypeAlias = Mapping[str, ParameterValue]
Headers: TypeAlias = Tuple[Tuple[str, str], ...]
QueryItems: TypeAlias = Tuple[Tuple[str, str], ...]
StatusCode = int


class HTTPMethod(str, Enum):
    """HTTP methods supported by the pipeline."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    
    @property
    def allows_body(self) -> bool:
        """Whether a request with this method may carry a body."""
        return self is not HTTPMethod.GET


UPLOAD_METHODS = frozenset({HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.PATCH})


class ContentEncoding(Enum):
    """Byte-level serialization applied to a parameter set."""
    JSON = "json"
    URL_ENCODED = "url_encoded"
    
    @property
    def media_type(self) -> str:
        """Canonical Content-Type header value for this encoding."""
        if self is ContentEncoding.JSON:
            return ContentType.JSON.value
        return ContentType.FORM_URL_ENCODED.value


class ContentType(str, Enum):
    """Content types a caller may declare for request parameters."""
    JSON = "application/json"
    FORM_URL_ENCODED = "application/x-www-form-urlencoded; charset=utf-8"
    
    @property
    def encoding(self) -> ContentEncoding:
        """The body encoding this content type selects."""
        if self is ContentType.JSON:
            return ContentEncoding.JSON
        return ContentEncoding.URL_ENCODED


class MediaKind(Enum):
    """Kinds of binary payload that can be uploaded."""
    JPEG = "jpeg"
    PNG = "png"
    
    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"
    
    @property
    def file_extension(self) -> str:
        return f".{self.value}"


class UploadFraming(Enum):
    """How an upload payload is wrapped before transmission."""
    RAW_BINARY = "raw_binary"
    MULTIPART_FORM_DATA = "multipart_form_data"


@dataclass(frozen=True)
class UploadPayload:
    """
    A single named binary payload to upload.
    
    The payload is owned by the caller and only read by the pipeline.
    """
    
    field_name: str
    data: bytes
    media_kind: MediaKind
    
    def __post_init__(self) -> None:
        """Validate payload data after initialization."""
        if not isinstance(self.field_name, str) or not self.field_name:
            raise ValueError("field_name must be a non-empty string")
        
        if not isinstance(self.data, bytes):
            raise ValueError("data must be bytes")
        
        if not isinstance(self.media_kind, MediaKind):
            raise ValueError("media_kind must be a MediaKind")
    
    @property
    def mime_type(self) -> str:
        """Get the MIME type derived from the media kind."""
        return self.media_kind.mime_type
    
    @property
    def file_extension(self) -> str:
        """Get the file extension derived from the media kind."""
        return self.media_kind.file_extension
    
    @property
    def filename(self) -> str:
        """Get the filename sent in the multipart disposition."""
        return f"{self.field_name}{self.file_extension}"


class URLComponents(NamedTuple):
    """Immutable representation of the parts a transport needs to connect."""
    scheme: str
    host: str
    port: int
    target: str
    
    @classmethod
    def from_url(cls, url: str) -> "URLComponents":
        """Create URLComponents from an absolute http(s) URL string."""
        parsed = urlsplit(url)
        scheme = parsed.scheme or "http"
        host = parsed.hostname or ""
        port = parsed.port or (443 if scheme == "https" else 80)
        target = parsed.path or "/"
        if parsed.query:
            target = f"{target}?{parsed.query}"
        
        return cls(scheme=scheme, host=host, port=port, target=target)
    
    @property
    def is_tls(self) -> bool:
        return self.scheme == "https"
    
    @property
    def host_header(self) -> str:
        """Host header value, omitting the port when it is the default."""
        default_port = 443 if self.is_tls else 80
        host = f"[{self.host}]" if ":" in self.host else self.host
        if self.port == default_port:
            return host
        return f"{host}:{self.port}"


def _find_header(headers: Headers, name: str) -> Optional[str]:
    name_lower = name.lower()
    for header_name, header_value in headers:
        if header_name.lower() == name_lower:
            return header_value
    return None


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Immutable description of one outbound request.
    
    Built by the request builder and handed to the transport as is.
    GET requests carry parameters exclusively as query items and never
    a body.
    """
    
    url: str
    method: HTTPMethod
    query_parameters: QueryItems = ()
    headers: Headers = ()
    body: Optional[bytes] = None
    content_type: Optional[str] = None
    
    def __post_init__(self) -> None:
        """Validate descriptor data after initialization."""
        if not isinstance(self.method, HTTPMethod):
            raise ValueError("method must be an HTTPMethod")
        
        if self.body is not None and not isinstance(self.body, bytes):
            raise ValueError("body must be bytes")
        
        if self.body is not None and not self.method.allows_body:
            raise ValueError("GET requests cannot carry a body")
        
        for name, value in self.headers:
            if not isinstance(name, str) or not isinstance(value, str):
                raise ValueError("header names and values must be str")
    
    @property
    def full_url(self) -> str:
        """The URL with query items serialized and appended."""
        if not self.query_parameters:
            return self.url
        
        base, _, fragment = self.url.partition("#")
        separator = "&" if urlsplit(base).query else "?"
        if base.endswith(("?", "&")):
            separator = ""
        full = f"{base}{separator}{urlencode(self.query_parameters)}"
        return f"{full}#{fragment}" if fragment else full
    
    @property
    def components(self) -> URLComponents:
        """Connection components of the full URL."""
        return URLComponents.from_url(self.full_url)
    
    def get_header(self, name: str) -> Optional[str]:
        """Get a header value by name (case-insensitive)."""
        return _find_header(self.headers, name)
    
    def has_header(self, name: str) -> bool:
        """Check if a header exists (case-insensitive)."""
        return self.get_header(name) is not None
    
    def header_dict(self) -> Dict[str, str]:
        """Headers as a plain dictionary."""
        return dict(self.headers)


@dataclass(frozen=True)
class ResponseOutcome:
    """
    Raw result of one transport call.
    
    Exists only between the transport invoker and the response resolver.
    """
    
    status_code: StatusCode
    body: bytes = b""
    headers: Headers = field(default_factory=tuple)
    
    def __post_init__(self) -> None:
        """Validate outcome data after initialization."""
        if not isinstance(self.status_code, int):
            raise ValueError("status_code must be int")
        
        if not isinstance(self.body, bytes):
            raise ValueError("body must be bytes")
    
    def get_header(self, name: str) -> Optional[str]:
        """Get a header value by name (case-insensitive)."""
        return _find_header(self.headers, name)


@dataclass(frozen=True)
class ProgressEvent:
    """Upload progress notification."""
    
    bytes_sent: int
    total_bytes: int
    
    @property
    def fraction(self) -> float:
        """Fraction of the body sent, clamped to [0, 1]."""
        if self.total_bytes <= 0:
            return 1.0
        return min(max(self.bytes_sent / self.total_bytes, 0.0), 1.0)
