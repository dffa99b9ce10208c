"""Utility helper functions for the gateway routes."""

from typing import AsyncIterator
from urllib.parse import quote

from fastapi import UploadFile, status
from fastapi.responses import StreamingResponse
from starlette.types import Receive, Scope, Send

from common.constants import UPLOAD_READ_SIZE_BYTES
from gateway.services.file_service import FileDownload


def content_disposition(file_name: str) -> str:
    """
    Build an attachment Content-Disposition header value.

    Args:
        file_name: Original file name, possibly non-ASCII

    Returns:
        Header value with an ASCII fallback and an RFC 5987 encoded name
    """
    fallback = file_name.encode("ascii", "replace").decode("ascii").replace('"', "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(file_name)}"


async def iter_upload(file: UploadFile) -> AsyncIterator[bytes]:
    """Yield the spooled multipart content in bounded chunks."""
    while True:
        chunk = await file.read(UPLOAD_READ_SIZE_BYTES)
        if not chunk:
            break
        yield chunk


class ShareStreamingResponse(StreamingResponse):
    """
    Streaming response that owns an opened download.

    The share handle is released when the response ends, including when
    the client disconnects before the body is started.
    """

    def __init__(self, download: FileDownload, **kwargs):
        super().__init__(download.body, **kwargs)
        self.download = download

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            await self.download.close()


def download_response(download: FileDownload) -> StreamingResponse:
    """
    Wrap an opened download in a 200 or 206 streaming response.

    Args:
        download: FileDownload from FileService.open_download

    Returns:
        StreamingResponse advertising byte-range support
    """
    headers = {
        "Accept-Ranges": "bytes",
        "Content-Length": str(download.content_length),
        "Content-Disposition": content_disposition(download.file_name),
    }
    status_code = status.HTTP_200_OK
    if download.byte_range:
        headers["Content-Range"] = download.byte_range.content_range
        status_code = status.HTTP_206_PARTIAL_CONTENT

    return ShareStreamingResponse(
        download,
        status_code=status_code,
        media_type="application/octet-stream",
        headers=headers,
    )
