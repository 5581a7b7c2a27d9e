"""
Section editor persistence

Saves always write the whole content record. There is no version check, so
two admins editing the same section overwrite each other (last write wins).
"""
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified

from atlantic_cms.apps.cms.models import Section
from atlantic_cms.common.fields import parse_content_record
from atlantic_cms.common.soft_delete import get_live_row

logger = logging.getLogger(__name__)


async def get_live_section(section_id: UUID, session: AsyncSession) -> Optional[Section]:
    return await get_live_row(session, Section, section_id)


async def save_section_content(section: Section, content: Dict[str, Any], session: AsyncSession) -> Section:
    """Overwrite the stored record with content and commit."""
    section.content = dict(content)
    # JSONB is not mutation-tracked; force content into the UPDATE
    flag_modified(section, "content")
    section.updated_at = datetime.now()
    session.add(section)
    await session.commit()
    await session.refresh(section)
    logger.info(f"Section {section.id} ({section.name}) saved with {len(section.content)} fields")
    return section


async def set_section_field(section: Section, field: str, value: Any, session: AsyncSession) -> Section:
    """Write one value (typically an uploaded media URL) into the record, then save the whole record."""
    content = dict(parse_content_record(section.content))
    content[field] = value
    return await save_section_content(section, content, session)
