"""
Upload body framing for http_pipeline.

A payload is either sent verbatim or wrapped in a single-part
multipart/form-data body. Boundaries are fresh per call and are not
checked against the payload content.
"""

import uuid
from typing import Optional, Tuple

from .http_primitives import UploadFraming, UploadPayload

CRLF = b"\r\n"


def generate_boundary() -> str:
    """Generate a new multipart boundary token."""
    return f"Boundary-{uuid.uuid4().hex.upper()}"


def multipart_content_type(boundary: str) -> str:
    return f"multipart/form-data; boundary={boundary}"


def build_upload_body(
    payload: UploadPayload,
    framing: UploadFraming,
    boundary: Optional[str] = None,
) -> Tuple[bytes, str]:
    """
    Build the request body and Content-Type value for an upload.
    
    Args:
        payload: The binary payload to send
        framing: Raw binary or multipart/form-data framing
        boundary: Boundary to use instead of a generated one
        
    Returns:
        Tuple of (body bytes, Content-Type header value)
    """
    if framing is UploadFraming.RAW_BINARY:
        return payload.data, payload.mime_type
    
    if boundary is None:
        boundary = generate_boundary()
    
    disposition = (
        f'Content-Disposition: form-data; name="{payload.field_name}"; '
        f'filename="{payload.filename}"'
    )
    parts = [
        f"--{boundary}".encode("utf-8"), CRLF,
        disposition.encode("utf-8"), CRLF,
        f"Content-Type: {payload.mime_type}".encode("utf-8"), CRLF,
        CRLF,
        payload.data,
        CRLF,
        f"--{boundary}--".encode("utf-8"), CRLF,
    ]
    
    return b"".join(parts), multipart_content_type(boundary)
