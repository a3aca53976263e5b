# =============================================================================
# app/routers/uploads.py - Screenshot Upload Endpoints
# =============================================================================
# Handles image uploads with validation and storage.
# The returned URLs are what the admin form puts in a project's screenshots.
# =============================================================================

import logging
import os
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from pydantic import BaseModel, Field

from app.auth import get_current_admin, AuthUser
from app.config import settings
from app.dependencies import MediaServiceDep, ProjectServiceDep
from app.exceptions import (
    FileTooLargeError,
    ImageInUseError,
    InvalidFileTypeError,
    UploadFailedError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class UploadResponse(BaseModel):
    """Public URLs of the uploaded images, in upload order."""
    urls: list[str] = Field(default_factory=list)


class ImageDeleteRequest(BaseModel):
    """An uploaded image to discard."""
    url: str = Field(..., min_length=1)


class ImageDeleteResponse(BaseModel):
    deleted: bool


# =============================================================================
# Helper Functions
# =============================================================================

def _validate_extension(filename: str) -> None:
    allowed = settings.allowed_image_extensions_list
    ext = os.path.splitext(filename)[1].lower()
    if ext not in allowed:
        raise InvalidFileTypeError(filename, allowed)


def _validate_size(content: bytes) -> None:
    if len(content) > settings.max_upload_size_bytes:
        raise FileTooLargeError(len(content) / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)


async def _read_upload(file: UploadFile) -> bytes:
    """Read an upload and release its temporary spool file."""
    try:
        return await file.read()
    finally:
        await file.close()


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/images", response_model=UploadResponse)
async def upload_images(
    files: Annotated[list[UploadFile], File(description="Image files to upload")],
    media: MediaServiceDep,
    user: AuthUser = Depends(get_current_admin),
):
    """
    Upload one or more screenshots.

    This endpoint:
    1. Validates every file (extension, size) before storing any
    2. Uploads the files one after another
    3. Returns their public URLs in the same order

    If any upload fails, the images already stored by this request are
    deleted again and no URLs are returned.
    """
    contents: list[tuple[UploadFile, bytes]] = []
    for file in files:
        filename = file.filename or ""
        _validate_extension(filename)
        content = await _read_upload(file)
        _validate_size(content)
        contents.append((file, content))

    urls: list[str] = []
    try:
        for file, content in contents:
            url = await media.upload_image(content, file.filename or "", file.content_type)
            urls.append(url)
    except UploadFailedError:
        if urls:
            logger.warning(f"Upload batch failed, discarding {len(urls)} stored images")
            await media.delete_images(urls)
        raise

    return UploadResponse(urls=urls)


@router.delete("/images", response_model=ImageDeleteResponse)
async def delete_image(
    request: ImageDeleteRequest,
    media: MediaServiceDep,
    projects: ProjectServiceDep,
    user: AuthUser = Depends(get_current_admin),
):
    """
    Discard an uploaded image that no saved project references yet.

    Raises:
        409: If a saved project still lists the image
        503: If the reference check fails (nothing is deleted)

    Otherwise best effort: reports whether the delete went through.
    """
    owner = await projects.find_image_owner(request.url)
    if owner is not None:
        raise ImageInUseError(request.url, owner)

    deleted = await media.delete_image(request.url)
    return ImageDeleteResponse(deleted=deleted)
