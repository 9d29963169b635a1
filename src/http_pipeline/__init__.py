"""
http_pipeline - declarative HTTP requests with typed results

Builds wire requests from declarative descriptions (JSON, URL-encoded,
raw binary or multipart bodies), executes them through a pluggable
transport and decodes responses into caller-specified types.
"""

__version__ = "0.1.0"
__author__ = "Developer"
__email__ = "dev@example.com"

# Import main components for easy access
from .http_primitives import (
    ContentEncoding,
    ContentType,
    HTTPMethod,
    MediaKind,
    ProgressEvent,
    RequestDescriptor,
    ResponseOutcome,
    UploadFraming,
    UploadPayload,
)
from .encoding import (
    encode_body,
    encode_query,
    escape,
    parameters_from_model,
    select_encoding,
)
from .multipart import build_upload_body, generate_boundary
from .request_builder import build_request, build_upload_request
from .transport import Transport, TransportInvoker
from .h11_transport import H11Transport
from .resolver import SUCCESS_STATUS_RANGE, resolve, validate_status
from .envelope import ApiResponse, DataResponse, EmptyResponse
from .client import HTTPClient
from .exceptions import (
    PipelineError,
    InvalidURLError,
    InvalidHTTPMethodError,
    EncodingError,
    TransportError,
    InvalidStatusCodeError,
    DecodingError,
)

__all__ = [
    "ContentEncoding",
    "ContentType",
    "HTTPMethod",
    "MediaKind",
    "ProgressEvent",
    "RequestDescriptor",
    "ResponseOutcome",
    "UploadFraming",
    "UploadPayload",
    "encode_body",
    "encode_query",
    "escape",
    "parameters_from_model",
    "select_encoding",
    "build_upload_body",
    "generate_boundary",
    "build_request",
    "build_upload_request",
    "Transport",
    "TransportInvoker",
    "H11Transport",
    "SUCCESS_STATUS_RANGE",
    "resolve",
    "validate_status",
    "ApiResponse",
    "DataResponse",
    "EmptyResponse",
    "HTTPClient",
    "PipelineError",
    "InvalidURLError",
    "InvalidHTTPMethodError",
    "EncodingError",
    "TransportError",
    "InvalidStatusCodeError",
    "DecodingError",
]
