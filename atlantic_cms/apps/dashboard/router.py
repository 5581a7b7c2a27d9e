"""
Dashboard router
Content counts for the admin landing page
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from pydantic import BaseModel
from typing import Dict
import logging

from atlantic_cms.database import get_async_session
from atlantic_cms.apps.authentication.dependencies import get_current_admin
from atlantic_cms.apps.authentication.schemas import AdminUser
from atlantic_cms.apps.recycle_bin.utils.recycle_bin import DELETED_SOURCES

logger = logging.getLogger(__name__)

router = APIRouter()


class DashboardStats(BaseModel):
    live: Dict[str, int]
    deleted: int


@router.get("/stats", response_model=DashboardStats, status_code=status.HTTP_200_OK)
async def get_stats(
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Live rows per content type plus everything waiting in the recycle bin
    """
    try:
        live: Dict[str, int] = {}
        deleted = 0
        for item_type, model, _ in DELETED_SOURCES:
            stmt = select(model.is_deleted, func.count()).group_by(model.is_deleted)
            result = await session.execute(stmt)
            counts = {bool(flag): count for flag, count in result.all()}
            live[item_type] = counts.get(False, 0)
            deleted += counts.get(True, 0)

        return DashboardStats(live=live, deleted=deleted)
    except Exception as e:
        logger.error(f"Error loading dashboard stats: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error loading dashboard stats: {str(e)}"
        )
