"""
Soft-delete helpers shared by the admin routers and the recycle bin
"""
from datetime import datetime
from typing import Any, Optional, Type
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel


async def set_deleted_flag(
    session: AsyncSession,
    model: Type[SQLModel],
    row_id: UUID,
    deleted: bool,
) -> Optional[Any]:
    """
    Flip is_deleted on one row and stamp updated_at.

    Returns the row, or None when no row has that id. The caller commits.
    """
    row = await session.get(model, row_id)
    if row is None:
        return None

    row.is_deleted = deleted
    row.updated_at = datetime.now()
    session.add(row)
    await session.flush()
    return row


async def get_live_row(session: AsyncSession, model: Type[SQLModel], row_id: UUID) -> Optional[Any]:
    """Row by id unless it is missing or sitting in the recycle bin."""
    row = await session.get(model, row_id)
    if row is None or row.is_deleted:
        return None
    return row
