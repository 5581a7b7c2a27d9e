"""
Upload pipeline: validate -> write blob -> public URL

A blob written before a later failure is not removed; it stays in storage
without an owning record.
"""
from typing import Optional
import logging

from atlantic_cms.apps.uploads.schemas import UploadResponse
from atlantic_cms.apps.uploads.services.storage_service import SupabaseStorageService
from atlantic_cms.apps.uploads.utils.validation import (
    CallSite,
    CALL_SITE_LIMITS,
    MediaKind,
    build_storage_path,
    validate_upload,
)

logger = logging.getLogger(__name__)


class UploadFailed(Exception):
    """Storage write or public URL lookup failed after validation passed."""


async def upload_media(
    storage: SupabaseStorageService,
    file_content: bytes,
    filename: Optional[str],
    content_type: Optional[str],
    folder: str,
    media_kind: MediaKind,
    max_bytes: int,
) -> UploadResponse:
    """
    Validate and store one file, returning its storage path and public URL.

    Raises UploadRejected before any storage call, UploadFailed when storage
    does not accept the file.
    """
    size = len(file_content)
    validate_upload(content_type, size, media_kind, max_bytes)

    file_path = build_storage_path(folder, filename)
    result = storage.upload_file(file_path, file_content, content_type)
    if not result.get("success"):
        raise UploadFailed(f"Failed to upload file: {result.get('error', 'Unknown error')}")

    public_url = storage.get_public_url(file_path)
    if not public_url:
        raise UploadFailed(f"Uploaded {file_path} but could not get its public URL")

    logger.info(f"Uploaded {filename} ({size} bytes) to {file_path}")
    return UploadResponse(path=file_path, url=public_url, content_type=content_type, size=size)


async def upload_for_call_site(
    storage: SupabaseStorageService,
    file_content: bytes,
    filename: Optional[str],
    content_type: Optional[str],
    folder: str,
    call_site: CallSite,
) -> UploadResponse:
    media_kind, max_bytes = CALL_SITE_LIMITS[call_site]
    return await upload_media(storage, file_content, filename, content_type, folder, media_kind, max_bytes)
