"""
Pytest configuration for http_pipeline tests.

This file contains shared fixtures and fakes for all tests
in the project.
"""

import json
from typing import Any, Dict, List, Optional

import pytest

from http_pipeline.http_primitives import (
    MediaKind,
    ProgressEvent,
    ResponseOutcome,
    UploadPayload,
)
from http_pipeline.network.mock import MockNetworkBackend
from http_pipeline.transport import Transport


class RecordingTransport(Transport):
    """Fake transport that records calls and replays a canned outcome."""
    
    def __init__(
        self,
        outcome: Optional[ResponseOutcome] = None,
        error: Optional[BaseException] = None,
        progress: Optional[List[ProgressEvent]] = None,
    ) -> None:
        self.outcome = outcome or ResponseOutcome(200, b"{}")
        self.error = error
        self.progress = progress or []
        self.calls: List[Dict[str, Any]] = []
        self.progress_callbacks: List[Any] = []
    
    async def execute(self, method, url, headers, body=None, on_progress=None):
        self.calls.append(
            {"method": method, "url": url, "headers": headers, "body": body}
        )
        self.progress_callbacks.append(on_progress)
        if on_progress is not None:
            for event in self.progress:
                on_progress(event)
        if self.error is not None:
            raise self.error
        return self.outcome
    
    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]


def json_outcome(data: Any, status_code: int = 200) -> ResponseOutcome:
    """Build a ResponseOutcome with a JSON body."""
    return ResponseOutcome(
        status_code=status_code,
        body=json.dumps(data).encode("utf-8"),
        headers=(("content-type", "application/json"),),
    )


def raw_http_response(
    status_code: int = 200,
    body: bytes = b"",
    reason: str = "OK",
    headers: Optional[List[str]] = None,
) -> bytes:
    """Build raw HTTP/1.1 response bytes with a Content-Length."""
    lines = [f"HTTP/1.1 {status_code} {reason}"]
    lines.extend(headers or ["Content-Type: application/json"])
    lines.append(f"Content-Length: {len(body)}")
    head = "\r\n".join(lines) + "\r\n\r\n"
    return head.encode("latin-1") + body


@pytest.fixture
def recording_transport():
    """Create a recording fake transport returning {} with status 200."""
    return RecordingTransport()


@pytest.fixture
def mock_backend():
    """Create an in-memory network backend."""
    return MockNetworkBackend()


@pytest.fixture
def jpeg_payload():
    """Sample JPEG upload payload."""
    return UploadPayload(
        field_name="avatar",
        data=b"\xff\xd8\xff\xe0fake-jpeg\r\n--not-a-boundary\r\n\xff\xd9",
        media_kind=MediaKind.JPEG,
    )


@pytest.fixture
def png_payload():
    """Sample PNG upload payload."""
    return UploadPayload(
        field_name="logo",
        data=b"\x89PNG\r\n\x1a\nfake-png",
        media_kind=MediaKind.PNG,
    )


@pytest.fixture
def sample_parameters():
    """Sample mixed-type parameter set."""
    return {"q": "shoes", "page": 2, "ratio": 0.5, "in_stock": True}
