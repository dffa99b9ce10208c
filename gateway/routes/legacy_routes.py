"""First-generation /file routes kept for existing front ends."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Header, Query, UploadFile
from fastapi.responses import PlainTextResponse

from gateway.dependencies import get_file_service
from gateway.exceptions import InvalidInputError
from gateway.schemas.files import ShareEntryResponse
from gateway.services.file_service import FileService
from gateway.utils import download_response, iter_upload

router = APIRouter(prefix="/file", tags=["Files (legacy)"])


@router.get("/list", response_model=List[ShareEntryResponse])
async def list_files(
    relative_path: str = Query("", alias="relativePath"),
    file_service: FileService = Depends(get_file_service),
):
    """Same as GET /files."""
    entries = await file_service.list_entries(relative_path)
    return [ShareEntryResponse.from_entry(entry) for entry in entries]


@router.post("/upload", response_class=PlainTextResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    relative_path: str = Form("", alias="relativePath"),
    file_service: FileService = Depends(get_file_service),
):
    """Upload that always overwrites an existing file."""
    if file is None or not file.filename:
        raise InvalidInputError("File is missing")

    await file_service.upload_file(relative_path, file.filename, iter_upload(file), overwrite=True)
    return PlainTextResponse("File uploaded successfully")


@router.get("/download")
async def download_file(
    relative_path: str = Query(..., alias="relativePath"),
    range_header: Optional[str] = Header(None, alias="Range"),
    file_service: FileService = Depends(get_file_service),
):
    """Same as GET /files/download."""
    download = await file_service.open_download(relative_path, range_header)
    return download_response(download)


@router.delete("/delete", response_class=PlainTextResponse)
async def delete_file(
    relative_path: str = Query(..., alias="relativePath"),
    file_service: FileService = Depends(get_file_service),
):
    """Same as DELETE /files."""
    await file_service.delete(relative_path)
    return PlainTextResponse("File deleted successfully")
