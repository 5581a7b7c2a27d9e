"""
Uploads router
Media uploads for the admin panel, with write-back into the owning record
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query, UploadFile, File
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, Type
from uuid import UUID
from datetime import datetime
import logging

from sqlmodel import SQLModel

from atlantic_cms.database import get_async_session
from atlantic_cms.apps.authentication.dependencies import get_current_admin
from atlantic_cms.apps.authentication.schemas import AdminUser
from atlantic_cms.apps.blog.models import BlogPost
from atlantic_cms.apps.cms.schemas import SectionRead
from atlantic_cms.apps.cms.utils.section_editor import get_live_section, set_section_field
from atlantic_cms.apps.cms.utils.section_resolver import to_section_read
from atlantic_cms.apps.portfolio.models import PortfolioItem
from atlantic_cms.apps.uploads.schemas import UploadResponse
from atlantic_cms.apps.uploads.services.storage_service import SupabaseStorageService, get_storage_service
from atlantic_cms.apps.uploads.services.upload_pipeline import UploadFailed, upload_media, upload_for_call_site
from atlantic_cms.apps.uploads.utils.errors import upload_http_error
from atlantic_cms.apps.uploads.utils.validation import CallSite, CALL_SITE_LIMITS, MediaKind, UploadFolder, UploadRejected
from atlantic_cms.common.soft_delete import get_live_row

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: UploadFile = File(...),
    folder: UploadFolder = Query(UploadFolder.UPLOADS),
    call_site: CallSite = Query(CallSite.GENERIC_IMAGE),
    media_kind: Optional[MediaKind] = Query(None, description="Defaults to the call site's media kind"),
    current_admin: AdminUser = Depends(get_current_admin),
    storage: SupabaseStorageService = Depends(get_storage_service),
):
    """
    Upload one file into a logical folder. The call site decides the size ceiling.
    """
    default_kind, max_bytes = CALL_SITE_LIMITS[call_site]
    try:
        file_content = await file.read()
        return await upload_media(
            storage,
            file_content,
            file.filename,
            file.content_type,
            folder.value,
            media_kind or default_kind,
            max_bytes,
        )
    except (UploadRejected, UploadFailed) as e:
        logger.warning(f"Upload of {file.filename} to {folder.value} refused: {e}")
        raise upload_http_error(e)


@router.post("/sections/{section_id}/media", response_model=SectionRead, status_code=status.HTTP_200_OK)
async def upload_section_media(
    section_id: UUID,
    field: str = Query(..., min_length=1, max_length=100),
    media_kind: MediaKind = Query(MediaKind.IMAGE),
    file: UploadFile = File(...),
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
    storage: SupabaseStorageService = Depends(get_storage_service),
):
    """
    Upload an image or video for a section field and store its URL in content[field]
    """
    if media_kind == MediaKind.BOTH:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Section media fields accept either image or video",
        )
    call_site = CallSite.SECTION_VIDEO if media_kind == MediaKind.VIDEO else CallSite.SECTION_IMAGE

    section = await get_live_section(section_id, session)
    if not section:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Section not found: {section_id}"
        )

    try:
        file_content = await file.read()
        uploaded = await upload_for_call_site(
            storage, file_content, file.filename, file.content_type, UploadFolder.SECTIONS.value, call_site
        )
    except (UploadRejected, UploadFailed) as e:
        logger.warning(f"Section {section_id} upload for '{field}' refused: {e}")
        raise upload_http_error(e)

    try:
        section = await set_section_field(section, field, uploaded.url, session)
        return to_section_read(section)
    except Exception as e:
        await session.rollback()
        logger.error(f"Uploaded {uploaded.path} but failed to save section {section_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="File uploaded but the section could not be saved."
        )


async def _upload_and_write_back(
    session: AsyncSession,
    storage: SupabaseStorageService,
    model: Type[SQLModel],
    row_id: UUID,
    attribute: str,
    file: UploadFile,
    folder: str,
    call_site: CallSite,
) -> UploadResponse:
    row = await get_live_row(session, model, row_id)
    if not row:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{model.__name__} not found: {row_id}"
        )

    try:
        file_content = await file.read()
        uploaded = await upload_for_call_site(
            storage, file_content, file.filename, file.content_type, folder, call_site
        )
    except (UploadRejected, UploadFailed) as e:
        logger.warning(f"{model.__name__} {row_id} upload for '{attribute}' refused: {e}")
        raise upload_http_error(e)

    try:
        setattr(row, attribute, uploaded.url)
        row.updated_at = datetime.now()
        session.add(row)
        await session.commit()
    except Exception as e:
        await session.rollback()
        logger.error(f"Uploaded {uploaded.path} but failed to update {model.__name__} {row_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="File uploaded but the record could not be saved."
        )

    logger.info(f"{model.__name__} {row_id}.{attribute} set to {uploaded.path}")
    return uploaded


@router.post("/portfolio/{item_id}/thumbnail", response_model=UploadResponse, status_code=status.HTTP_200_OK)
async def upload_portfolio_thumbnail(
    item_id: UUID,
    file: UploadFile = File(...),
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
    storage: SupabaseStorageService = Depends(get_storage_service),
):
    return await _upload_and_write_back(
        session, storage, PortfolioItem, item_id, "thumbnail_image", file, UploadFolder.PORTFOLIO.value, CallSite.GENERIC_IMAGE
    )


@router.post("/portfolio/{item_id}/video", response_model=UploadResponse, status_code=status.HTTP_200_OK)
async def upload_portfolio_video(
    item_id: UUID,
    file: UploadFile = File(...),
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
    storage: SupabaseStorageService = Depends(get_storage_service),
):
    return await _upload_and_write_back(
        session, storage, PortfolioItem, item_id, "video_url", file, UploadFolder.PORTFOLIO.value, CallSite.LEGACY_VIDEO
    )


@router.post("/blog/{post_id}/cover", response_model=UploadResponse, status_code=status.HTTP_200_OK)
async def upload_blog_cover(
    post_id: UUID,
    file: UploadFile = File(...),
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
    storage: SupabaseStorageService = Depends(get_storage_service),
):
    return await _upload_and_write_back(
        session, storage, BlogPost, post_id, "cover_image", file, UploadFolder.BLOG.value, CallSite.GENERIC_IMAGE
    )
