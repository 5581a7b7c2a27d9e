"""
Recycle bin coordinator

Listing degrades per table: a failing table contributes nothing and the
other four are still returned. Restore and purge raise.
"""
from typing import Callable, Dict, List, Tuple, Type
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from atlantic_cms.database import reset_session
from atlantic_cms.apps.blog.models import BlogPost
from atlantic_cms.apps.cms.models import Page, Section
from atlantic_cms.apps.images.models import ImageAsset
from atlantic_cms.apps.portfolio.models import PortfolioItem
from atlantic_cms.apps.recycle_bin.schemas import DeletedItem
from atlantic_cms.common.soft_delete import set_deleted_flag

logger = logging.getLogger(__name__)


class RecycleBinError(Exception):
    """Restore or purge could not be carried out."""


class ItemNotFound(RecycleBinError):
    """No row with that id in the table implied by the item type."""


def image_title(image: ImageAsset) -> str:
    if image.alt_text:
        return image.alt_text
    if image.file_path:
        return image.file_path.rstrip("/").split("/")[-1] or "Image"
    return "Image"


# Item type -> (model, title of a row)
DELETED_SOURCES: List[Tuple[str, Type[SQLModel], Callable[[SQLModel], str]]] = [
    ("page", Page, lambda row: row.title),
    ("section", Section, lambda row: row.name),
    ("portfolio", PortfolioItem, lambda row: row.title),
    ("blog", BlogPost, lambda row: row.title),
    ("image", ImageAsset, image_title),
]

SOURCES_BY_TYPE: Dict[str, Tuple[Type[SQLModel], Callable[[SQLModel], str]]] = {
    item_type: (model, title_of) for item_type, model, title_of in DELETED_SOURCES
}


def get_source(item_type: str) -> Tuple[Type[SQLModel], Callable[[SQLModel], str]]:
    source = SOURCES_BY_TYPE.get(item_type)
    if source is None:
        raise ValueError(f"Unknown item type: {item_type}")
    return source


async def _fetch_deleted(
    session: AsyncSession,
    item_type: str,
    model: Type[SQLModel],
    title_of: Callable[[SQLModel], str],
) -> List[DeletedItem]:
    try:
        stmt = select(model).where(model.is_deleted == True)
        result = await session.execute(stmt)
        return [
            DeletedItem(id=row.id, type=item_type, title=title_of(row), deleted_at=row.updated_at)
            for row in result.scalars().all()
        ]
    except Exception as e:
        logger.warning(f"Could not list deleted {item_type} rows: {e}")
        await reset_session(session)
        return []


async def list_deleted(session: AsyncSession) -> List[DeletedItem]:
    """Soft-deleted rows of all five tables, most recently deleted first."""
    items: List[DeletedItem] = []
    for item_type, model, title_of in DELETED_SOURCES:
        items.extend(await _fetch_deleted(session, item_type, model, title_of))

    items.sort(key=lambda item: item.deleted_at, reverse=True)
    return items


async def restore_item(session: AsyncSession, item_id: UUID, item_type: str) -> DeletedItem:
    model, title_of = get_source(item_type)
    try:
        row = await set_deleted_flag(session, model, item_id, False)
        if row is None:
            raise ItemNotFound(f"{item_type} {item_id} not found")
        await session.commit()
    except ItemNotFound:
        raise
    except Exception as e:
        await session.rollback()
        raise RecycleBinError(f"Failed to restore {item_type}: {str(e)}") from e

    logger.info(f"Restored {item_type} {item_id}")
    return DeletedItem(id=row.id, type=item_type, title=title_of(row), deleted_at=row.updated_at)


async def purge_item(session: AsyncSession, item_id: UUID, item_type: str) -> None:
    """Delete the row for good. Confirmation is the caller's job."""
    model, _ = get_source(item_type)
    try:
        row = await session.get(model, item_id)
        if row is None:
            raise ItemNotFound(f"{item_type} {item_id} not found")
        await session.delete(row)
        await session.commit()
    except ItemNotFound:
        raise
    except Exception as e:
        await session.rollback()
        raise RecycleBinError(f"Failed to permanently delete {item_type}: {str(e)}") from e

    logger.info(f"Permanently deleted {item_type} {item_id}")
