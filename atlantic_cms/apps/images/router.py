"""
Image library router
"""
from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional
from uuid import UUID
from datetime import datetime
import logging
import os

from atlantic_cms.database import get_async_session
from atlantic_cms.apps.authentication.dependencies import get_current_admin
from atlantic_cms.apps.authentication.schemas import AdminUser
from atlantic_cms.apps.images.models import ImageAsset
from atlantic_cms.apps.images.schemas import ImageAssetUpdate, ImageAssetResponse
from atlantic_cms.apps.uploads.services.storage_service import SupabaseStorageService, get_storage_service
from atlantic_cms.apps.uploads.services.upload_pipeline import UploadFailed, upload_for_call_site
from atlantic_cms.apps.uploads.utils.errors import upload_http_error
from atlantic_cms.apps.uploads.utils.validation import CallSite, UploadFolder, UploadRejected, validate_for_call_site
from atlantic_cms.common.soft_delete import get_live_row, set_deleted_flag

logger = logging.getLogger(__name__)

router = APIRouter()

IMAGE_FOLDER = UploadFolder.IMAGES.value


def alt_text_from_filename(filename: Optional[str]) -> str:
    return os.path.splitext(filename or "")[0] or "Image"


@router.get("", response_model=List[ImageAssetResponse], status_code=status.HTTP_200_OK)
async def list_images(
    section_id: Optional[UUID] = None,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Image library, newest first
    """
    stmt = select(ImageAsset).where(ImageAsset.is_deleted == False)
    if section_id:
        stmt = stmt.where(ImageAsset.section_id == section_id)
    stmt = stmt.order_by(ImageAsset.created_at.desc())
    result = await session.execute(stmt)
    return result.scalars().all()


@router.post("", response_model=List[ImageAssetResponse], status_code=status.HTTP_201_CREATED)
async def upload_images(
    files: List[UploadFile] = File(...),
    section_id: Optional[UUID] = Form(None),
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
    storage: SupabaseStorageService = Depends(get_storage_service),
):
    """
    Upload one or more images into the library.

    Every file is validated before the first one is stored, so one bad file
    rejects the whole batch without writing anything.
    """
    contents = []
    try:
        for file in files:
            content = await file.read()
            validate_for_call_site(file.content_type, len(content), CallSite.GENERIC_IMAGE)
            contents.append((file, content))
    except UploadRejected as e:
        logger.warning(f"Image batch rejected: {e}")
        raise upload_http_error(e)

    assets = []
    try:
        for file, content in contents:
            uploaded = await upload_for_call_site(
                storage, content, file.filename, file.content_type, IMAGE_FOLDER, CallSite.GENERIC_IMAGE
            )
            asset = ImageAsset(
                section_id=section_id,
                file_path=uploaded.url,
                alt_text=alt_text_from_filename(file.filename),
            )
            session.add(asset)
            assets.append(asset)
    except (UploadRejected, UploadFailed) as e:
        await session.rollback()
        logger.warning(f"Image upload failed: {e}")
        raise upload_http_error(e)

    try:
        await session.commit()
        for asset in assets:
            await session.refresh(asset)
        logger.info(f"{len(assets)} image(s) added to the library")
        return assets
    except Exception as e:
        await session.rollback()
        logger.error(f"Error saving image assets: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Images uploaded but could not be saved: {str(e)}"
        )


@router.put("/{image_id}", response_model=ImageAssetResponse, status_code=status.HTTP_200_OK)
async def update_image(
    image_id: UUID,
    request: ImageAssetUpdate,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Update the alt text of an image
    """
    try:
        image = await get_live_row(session, ImageAsset, image_id)
        if not image:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Image not found: {image_id}"
            )
        image.alt_text = request.alt_text
        image.updated_at = datetime.now()
        session.add(image)
        await session.commit()
        await session.refresh(image)
        return image
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error updating image {image_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update image: {str(e)}"
        )


@router.delete("/{image_id}", status_code=status.HTTP_200_OK)
async def delete_image(
    image_id: UUID,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Move an image to the recycle bin
    """
    try:
        image = await get_live_row(session, ImageAsset, image_id)
        if not image:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Image not found: {image_id}"
            )
        await set_deleted_flag(session, ImageAsset, image_id, True)
        await session.commit()
        logger.info(f"Image {image_id} moved to recycle bin")
        return {"success": True, "message": "Image moved to recycle bin."}
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error deleting image {image_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete image: {str(e)}"
        )
