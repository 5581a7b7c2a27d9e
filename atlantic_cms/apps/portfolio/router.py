"""
Portfolio router
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional
from uuid import UUID
from datetime import datetime
import logging

from atlantic_cms.database import get_async_session
from atlantic_cms.apps.authentication.dependencies import get_current_admin
from atlantic_cms.apps.authentication.schemas import AdminUser
from atlantic_cms.apps.portfolio.models import PortfolioItem
from atlantic_cms.apps.portfolio.schemas import (
    PORTFOLIO_CATEGORIES,
    PortfolioItemCreate,
    PortfolioItemUpdate,
    PortfolioItemResponse,
)
from atlantic_cms.common.soft_delete import get_live_row, set_deleted_flag

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_item_or_404(session: AsyncSession, item_id: UUID) -> PortfolioItem:
    item = await get_live_row(session, PortfolioItem, item_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Portfolio item not found: {item_id}"
        )
    return item


@router.get("/categories", response_model=List[str], status_code=status.HTTP_200_OK)
async def list_categories():
    return PORTFOLIO_CATEGORIES


@router.get("/items", response_model=List[PortfolioItemResponse], status_code=status.HTTP_200_OK)
async def list_items(
    category: Optional[str] = Query(None, description="Category filter; 'All' means no filter"),
    featured: Optional[bool] = Query(None),
    session: AsyncSession = Depends(get_async_session),
):
    """
    Portfolio items in display order
    """
    try:
        stmt = select(PortfolioItem).where(PortfolioItem.is_deleted == False)
        if category and category != "All":
            stmt = stmt.where(PortfolioItem.category == category)
        if featured is not None:
            stmt = stmt.where(PortfolioItem.is_featured == featured)
        stmt = stmt.order_by(PortfolioItem.sort_order, PortfolioItem.created_at.desc())

        result = await session.execute(stmt)
        return result.scalars().all()
    except Exception as e:
        logger.error(f"Error listing portfolio items: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error listing portfolio items: {str(e)}"
        )


@router.get("/items/{item_id}", response_model=PortfolioItemResponse, status_code=status.HTTP_200_OK)
async def get_item(
    item_id: UUID,
    session: AsyncSession = Depends(get_async_session),
):
    return await _get_item_or_404(session, item_id)


@router.post("/items", response_model=PortfolioItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    request: PortfolioItemCreate,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    try:
        item = PortfolioItem(**request.model_dump())
        session.add(item)
        await session.commit()
        await session.refresh(item)

        logger.info(f"Portfolio item created: {item.title} ({item.category})")
        return item
    except Exception as e:
        await session.rollback()
        logger.error(f"Error creating portfolio item: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save item: {str(e)}"
        )


@router.put("/items/{item_id}", response_model=PortfolioItemResponse, status_code=status.HTTP_200_OK)
async def update_item(
    item_id: UUID,
    request: PortfolioItemUpdate,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    try:
        item = await _get_item_or_404(session, item_id)
        for attribute, value in request.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(item, attribute, value)

        item.updated_at = datetime.now()
        session.add(item)
        await session.commit()
        await session.refresh(item)
        return item
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error updating portfolio item {item_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save item: {str(e)}"
        )


@router.post("/items/{item_id}/toggle-featured", response_model=PortfolioItemResponse, status_code=status.HTTP_200_OK)
async def toggle_featured(
    item_id: UUID,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    try:
        item = await _get_item_or_404(session, item_id)
        item.is_featured = not item.is_featured
        item.updated_at = datetime.now()
        session.add(item)
        await session.commit()
        await session.refresh(item)
        return item
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error toggling portfolio item {item_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update item: {str(e)}"
        )


@router.delete("/items/{item_id}", status_code=status.HTTP_200_OK)
async def delete_item(
    item_id: UUID,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Move an item to the recycle bin
    """
    try:
        await _get_item_or_404(session, item_id)
        await set_deleted_flag(session, PortfolioItem, item_id, True)
        await session.commit()
        logger.info(f"Portfolio item {item_id} moved to recycle bin")
        return {"success": True, "message": "Item moved to recycle bin."}
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error deleting portfolio item {item_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete item: {str(e)}"
        )
