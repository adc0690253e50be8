"""
File upload API routes.
"""

from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from liora.core.deps import get_current_user, get_upload_service
from liora.models.auth import User
from liora.models.schemas import (
    UploadBatchResponse,
    UploadedFile,
    UploadPresetInfo,
    UploadProgressResponse,
    UploadRejection,
)
from liora.services.upload_service import UploadService, validate_file

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/uploads", tags=["uploads"])


@router.get("/presets", response_model=List[UploadPresetInfo])
async def list_presets(uploads: UploadService = Depends(get_upload_service)):
    """Size and type limits for each kind of upload."""
    return uploads.list_presets()


@router.get("/progress", response_model=UploadProgressResponse)
async def upload_progress(
    preset: Optional[str] = Query(default=None),
    uploads: UploadService = Depends(get_upload_service)
):
    """Overall progress is the mean of per-file progress."""
    return uploads.progress(preset)


@router.get("", response_model=List[UploadedFile])
async def list_uploads(
    preset: Optional[str] = Query(default=None),
    uploads: UploadService = Depends(get_upload_service)
):
    return uploads.list_files(preset)


@router.post("/{preset}", response_model=UploadBatchResponse)
async def upload_files(
    preset: str,
    files: List[UploadFile] = File(...),
    user: User = Depends(get_current_user),
    uploads: UploadService = Depends(get_upload_service)
):
    """
    Validate and start uploading files for a preset.

    Files failing size or type checks are returned under `rejected` and
    never uploaded. Oversized files are rejected before their body is read.
    """
    upload_preset = uploads.check_batch(preset, len(files))

    payload = []
    oversized: List[UploadRejection] = []
    for upload in files:
        filename = upload.filename or "unnamed"
        if upload.size is not None and upload.size > upload_preset.max_size:
            oversized.append(UploadRejection(
                name=filename,
                error=validate_file(filename, upload.size, upload_preset)))
            continue
        payload.append((filename, await upload.read(), upload.content_type))

    if payload:
        result = await uploads.add_files(preset, payload)
    else:
        result = UploadBatchResponse(accepted=[])
    result.rejected = oversized + result.rejected
    logger.info(
        f"{user.id} uploaded {len(result.accepted)} file(s) to {preset}, "
        f"{len(result.rejected)} rejected")
    return result


@router.get("/{file_id}", response_model=UploadedFile)
async def get_upload(
    file_id: str,
    uploads: UploadService = Depends(get_upload_service)
):
    return uploads.get_file(file_id)


@router.post("/{file_id}/cancel", response_model=UploadedFile)
async def cancel_upload(
    file_id: str,
    uploads: UploadService = Depends(get_upload_service)
):
    """Abort an in-flight upload. The file goes back to pending."""
    return await uploads.cancel(file_id)


@router.post("/{file_id}/retry", response_model=UploadedFile)
async def retry_upload(
    file_id: str,
    uploads: UploadService = Depends(get_upload_service)
):
    """Retry a failed upload whose error is retryable."""
    return await uploads.retry(file_id)


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_upload(
    file_id: str,
    uploads: UploadService = Depends(get_upload_service)
):
    await uploads.remove(file_id)


@router.delete("")
async def clear_uploads(
    preset: Optional[str] = Query(default=None),
    uploads: UploadService = Depends(get_upload_service)
):
    return {"removed": await uploads.clear(preset)}
