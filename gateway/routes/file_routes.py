"""File operation API routes."""

from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Header, Query, UploadFile
from fastapi.responses import PlainTextResponse

from gateway.dependencies import get_file_service
from gateway.exceptions import InvalidInputError
from gateway.schemas.files import ExistsResponse, ShareEntryResponse
from gateway.services.file_service import FileService
from gateway.utils import download_response, iter_upload

router = APIRouter(prefix="/files", tags=["Files"])


@router.get("", response_model=List[ShareEntryResponse])
async def list_files(
    relative_path: str = Query("", alias="relativePath"),
    file_service: FileService = Depends(get_file_service),
):
    """
    List files and folders in a share directory.

    Parameters:
        - relativePath: Directory relative to the share base (empty = base)

    Returns:
        - Entries sorted folders first, then by name

    Raises:
        - 400: Path escapes the share base
        - 404: Directory not found
        - 500: Share failure
    """
    entries = await file_service.list_entries(relative_path)
    return [ShareEntryResponse.from_entry(entry) for entry in entries]


@router.post("", response_class=PlainTextResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    relative_path: str = Form("", alias="relativePath"),
    overwrite: bool = Form(True),
    file_service: FileService = Depends(get_file_service),
):
    """
    Upload a file to the share.

    Parameters:
        - file: File to upload (multipart/form-data)
        - relativePath: Destination directory, created when missing
        - overwrite: Replace an existing file (default) or store as name_N.ext

    Returns:
        - Text confirmation; X-Uploaded-Path carries the stored relative path

    Raises:
        - 400: File missing or empty
        - 500: Share failure
    """
    if file is None or not file.filename:
        raise InvalidInputError("File is missing")

    stored_path = await file_service.upload_file(
        relative_path, file.filename, iter_upload(file), overwrite=overwrite
    )
    return PlainTextResponse(
        "File uploaded successfully",
        headers={"X-Uploaded-Path": quote(stored_path)},
    )


@router.get("/exists", response_model=ExistsResponse)
async def file_exists(
    relative_path: str = Query(..., alias="relativePath"),
    file_service: FileService = Depends(get_file_service),
):
    """
    Check whether a file or folder exists.

    Raises:
        - 500: Share failure
    """
    exists = await file_service.exists(relative_path)
    return ExistsResponse(exists=exists)


@router.get("/download")
async def download_file(
    relative_path: str = Query(..., alias="relativePath"),
    range_header: Optional[str] = Header(None, alias="Range"),
    file_service: FileService = Depends(get_file_service),
):
    """
    Download a file, whole or as a single byte range (resumable).

    Parameters:
        - relativePath: File relative to the share base
        - Range header: bytes=<start>-<end> (optional, first range only)

    Returns:
        - 200 with the full body, or 206 with Content-Range

    Raises:
        - 400: Malformed or unsatisfiable range
        - 404: File not found
        - 500: Share failure
    """
    download = await file_service.open_download(relative_path, range_header)
    return download_response(download)


@router.delete("", response_class=PlainTextResponse)
async def delete_file(
    relative_path: str = Query(..., alias="relativePath"),
    file_service: FileService = Depends(get_file_service),
):
    """
    Delete a file or a folder with its contents. Deleting a missing path succeeds.

    Raises:
        - 500: Share failure
    """
    await file_service.delete(relative_path)
    return PlainTextResponse("File deleted successfully")
