"""Routes for uploading, downloading and listing files."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, UploadFile, status
from fastapi.responses import FileResponse

from src.models.product import ErrorResponse, FileListResponse, FileUploadResponse
from src.services.storage.file_storage import FileStorageDependency

router = APIRouter(prefix="/api", tags=["files"])
logger = logging.getLogger(__name__)


@router.post(
    "/upload",
    response_model=FileUploadResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
    summary="Upload a file into the shared upload directory",
)
async def upload_file(
    file: UploadFile,
    storage: FileStorageDependency,
) -> FileUploadResponse:
    try:
        filename = await asyncio.to_thread(storage.save, file.filename, file.file)
    finally:
        await file.close()

    return FileUploadResponse(
        message="File uploaded successfully",
        filename=filename,
    )


@router.get(
    "/download/{filename}",
    response_class=FileResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def download_file(filename: str, storage: FileStorageDependency) -> FileResponse:
    path = storage.path_for(filename)
    logger.info("Serving download %s", path.name)
    return FileResponse(
        path,
        filename=path.name,
        media_type="application/octet-stream",
    )


@router.get("/files", response_model=FileListResponse)
async def list_files(storage: FileStorageDependency) -> FileListResponse:
    return FileListResponse(files=storage.list_files())
