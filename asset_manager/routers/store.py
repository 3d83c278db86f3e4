# asset_manager/routers/store.py
"""
Store endpoints.

GET    /store              - List stored images
POST   /store/upload       - Upload an image (multipart "file")
GET    /store/view/{key}   - Stream a stored image
DELETE /store/{key}        - Delete an image, its thumbnail and metadata
"""

import logging
import mimetypes
import os
from typing import BinaryIO, Iterator

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from fastapi.responses import StreamingResponse

from asset_manager.schemas.store import (
    StorageItemResponse,
    StorageListResponse,
    UploadResponse,
)
from asset_manager.services.factory import get_storage_service
from asset_manager.services.storage_service import StorageService, generate_url
from asset_manager.storage.exceptions import ObjectNotFound, StorageWriteError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/store", tags=["store"])

CHUNK_SIZE = 64 * 1024
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def _iter_stream(stream: BinaryIO, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """Yield chunks from a backend stream, closing it when exhausted."""
    try:
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                break
            yield chunk
    finally:
        stream.close()


def _upload_size(file: UploadFile) -> int:
    if file.size is not None:
        size = file.size
    else:
        file.file.seek(0, os.SEEK_END)
        size = file.file.tell()
    file.file.seek(0)
    return size


@router.get("", response_model=StorageListResponse)
def list_images(service: StorageService = Depends(get_storage_service)) -> StorageListResponse:
    items = [StorageItemResponse.model_validate(item) for item in service.list_items()]
    return StorageListResponse(backend=service.identity(), total=len(items), items=items)


@router.post("/upload", response_model=UploadResponse, status_code=201)
def upload_image(
    file: UploadFile = File(...),
    service: StorageService = Depends(get_storage_service),
) -> UploadResponse:
    if not file.filename:
        raise HTTPException(status_code=400, detail="Please select a file to upload")

    content_type = file.content_type or DEFAULT_CONTENT_TYPE
    size = _upload_size(file)

    try:
        key = service.upload(file.filename, content_type, size, file.file)
    except StorageWriteError as e:
        logger.error(f"Upload failed for {file.filename}: {e}")
        raise HTTPException(status_code=502, detail=f"Failed to store file: {e.reason or e}")

    return UploadResponse(
        key=key,
        filename=file.filename,
        content_type=content_type,
        size=size,
        url=generate_url(key),
    )


@router.get("/view/{key:path}")
def view_image(key: str, service: StorageService = Depends(get_storage_service)) -> StreamingResponse:
    try:
        stream = service.fetch(key)
    except ObjectNotFound:
        raise HTTPException(status_code=404, detail=f"Object not found: {key}")

    media_type = service.content_type(key) or mimetypes.guess_type(key)[0] or DEFAULT_CONTENT_TYPE
    return StreamingResponse(_iter_stream(stream), media_type=media_type)


@router.delete("/{key:path}", status_code=204)
def delete_image(key: str, service: StorageService = Depends(get_storage_service)) -> Response:
    try:
        service.delete(key)
    except ObjectNotFound:
        raise HTTPException(status_code=404, detail=f"Object not found: {key}")
    return Response(status_code=204)
