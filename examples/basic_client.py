"""
Basic HTTPClient example using http_pipeline.

This example demonstrates a GET with query parameters, a form POST
and a multipart upload with progress reporting against httpbin.org.
"""

import asyncio
import logging
from typing import Any, Dict

from pydantic import BaseModel

from http_pipeline import (
    ContentType,
    HTTPClient,
    MediaKind,
    PipelineError,
    ProgressEvent,
    UploadPayload,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class Echo(BaseModel):
    args: Dict[str, Any] = {}
    form: Dict[str, Any] = {}
    files: Dict[str, Any] = {}
    url: str


async def simple_get_request(client: HTTPClient):
    """Demonstrate a GET request with query parameters."""
    logger.info("Making GET request...")
    
    echo = await client.request(
        "https://httpbin.org/get",
        Echo,
        parameters={"q": "shoes", "page": 2},
    )
    logger.info(f"Server saw args: {echo.args}")


async def form_post_request(client: HTTPClient):
    """Demonstrate a URL-encoded POST request."""
    logger.info("Making form POST request...")
    
    echo = await client.request(
        "https://httpbin.org/post",
        Echo,
        method="POST",
        parameters={"message": "Hello, World!", "count": 3, "urgent": True},
        content_type=ContentType.FORM_URL_ENCODED,
    )
    logger.info(f"Server saw form: {echo.form}")


async def multipart_upload(client: HTTPClient):
    """Demonstrate a multipart upload with progress."""
    logger.info("Uploading payload...")
    
    def on_progress(event: ProgressEvent) -> None:
        logger.info(f"Upload progress: {event.fraction:.0%}")
    
    payload = UploadPayload("avatar", b"\xff\xd8\xff" + b"\x00" * 200_000, MediaKind.JPEG)
    echo = await client.upload_request(
        "https://httpbin.org/post",
        Echo,
        payload,
        on_progress=on_progress,
    )
    logger.info(f"Server saw files: {list(echo.files)}")


async def main():
    """Run all examples."""
    client = HTTPClient(default_headers={"Accept": "application/json"})
    
    try:
        await simple_get_request(client)
        await form_post_request(client)
        await multipart_upload(client)
    except PipelineError as e:
        logger.error(f"Example failed: {e}")


if __name__ == "__main__":
    asyncio.run(main())
