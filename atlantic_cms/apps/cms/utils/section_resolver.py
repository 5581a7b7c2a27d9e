"""
Section content resolver
Public read path: page slug + section name -> content record
"""
from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from atlantic_cms.database import reset_session
from atlantic_cms.apps.cms.models import Page, Section
from atlantic_cms.apps.cms.schemas import SectionRead
from atlantic_cms.common.fields import parse_content_record

logger = logging.getLogger(__name__)


async def _fetch_page_id(page_slug: str, session: AsyncSession) -> Optional[UUID]:
    stmt = select(Page.id).where(Page.slug == page_slug, Page.is_deleted == False)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


def to_section_read(section: Section) -> SectionRead:
    return SectionRead(
        id=section.id,
        page_id=section.page_id,
        name=section.name,
        content=parse_content_record(section.content),
        sort_order=section.sort_order,
        is_deleted=section.is_deleted,
        updated_at=section.updated_at,
    )


async def resolve_section_row(
    page_slug: str,
    section_name: str,
    session: AsyncSession,
) -> Optional[SectionRead]:
    """
    Fetch the live section named section_name on the live page page_slug.

    Returns None when the page or the section is missing, and also when the
    backend fails: callers can't tell "not configured" from "unreachable".
    More than one section with the same name is treated as a failure too.
    """
    try:
        page_id = await _fetch_page_id(page_slug, session)
        if page_id is None:
            return None

        stmt = select(Section).where(
            Section.page_id == page_id,
            Section.name == section_name,
            Section.is_deleted == False,
        )
        result = await session.execute(stmt)
        section = result.scalar_one_or_none()
        if section is None:
            return None

        return to_section_read(section)
    except Exception as e:
        logger.warning(f"Section lookup failed for {page_slug}/{section_name}, using defaults: {e}")
        await reset_session(session)
        return None


async def resolve_section(
    page_slug: str,
    section_name: str,
    session: AsyncSession,
) -> Dict[str, Any]:
    """Content record of a section, {} when there is nothing usable."""
    section = await resolve_section_row(page_slug, section_name, session)
    if section is None:
        return {}
    return section.content


async def resolve_page_sections(page_slug: str, session: AsyncSession) -> List[SectionRead]:
    """All live sections of a live page ordered by sort_order; [] on miss or failure."""
    try:
        page_id = await _fetch_page_id(page_slug, session)
        if page_id is None:
            return []

        stmt = (
            select(Section)
            .where(Section.page_id == page_id, Section.is_deleted == False)
            .order_by(Section.sort_order.asc())
        )
        result = await session.execute(stmt)
        return [to_section_read(section) for section in result.scalars().all()]
    except Exception as e:
        logger.warning(f"Section listing failed for {page_slug}, using defaults: {e}")
        await reset_session(session)
        return []
