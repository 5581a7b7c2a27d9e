"""
Recycle bin router
Unified view of soft-deleted pages, sections, images, portfolio items and blog posts
"""
from fastapi import APIRouter, Depends, HTTPException, status, Path
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID
import logging

from atlantic_cms.database import get_async_session
from atlantic_cms.apps.authentication.dependencies import get_current_admin
from atlantic_cms.apps.authentication.schemas import AdminUser
from atlantic_cms.apps.recycle_bin.schemas import DeletedItem, ItemType, RecycleBinActionResponse
from atlantic_cms.apps.recycle_bin.utils.recycle_bin import (
    ItemNotFound,
    RecycleBinError,
    list_deleted,
    purge_item,
    restore_item,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[DeletedItem], status_code=status.HTTP_200_OK)
async def get_recycle_bin(
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Every soft-deleted item, most recently deleted first
    """
    return await list_deleted(session)


@router.post("/{item_type}/{item_id}/restore", response_model=RecycleBinActionResponse, status_code=status.HTTP_200_OK)
async def restore(
    item_type: ItemType = Path(...),
    item_id: UUID = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Put an item back (is_deleted = false)
    """
    try:
        item = await restore_item(session, item_id, item_type)
        return RecycleBinActionResponse(success=True, message=f'"{item.title}" has been restored.')
    except ItemNotFound as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except RecycleBinError as e:
        logger.error(f"Restore of {item_type} {item_id} failed: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to restore item. {str(e)}"
        )


@router.delete("/{item_type}/{item_id}", response_model=RecycleBinActionResponse, status_code=status.HTTP_200_OK)
async def permanently_delete(
    item_type: ItemType = Path(...),
    item_id: UUID = Path(...),
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Remove an item for good. The admin panel asks for confirmation first.
    """
    try:
        await purge_item(session, item_id, item_type)
        return RecycleBinActionResponse(success=True, message="Item permanently deleted.")
    except ItemNotFound as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except RecycleBinError as e:
        logger.error(f"Purge of {item_type} {item_id} failed: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete item. {str(e)}"
        )
