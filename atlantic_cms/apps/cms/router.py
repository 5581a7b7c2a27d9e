"""
CMS router for page and section content
"""
from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List
from uuid import UUID
import logging

from atlantic_cms.database import get_async_session, reset_session
from atlantic_cms.config import SECTION_CACHE_MAX_AGE
from atlantic_cms.apps.authentication.dependencies import get_current_admin
from atlantic_cms.apps.authentication.schemas import AdminUser
from atlantic_cms.apps.cms.models import Page, Section
from atlantic_cms.apps.cms.schemas import (
    PageCreate,
    PageUpdate,
    PageResponse,
    SectionCreate,
    SectionUpdate,
    SectionRead,
    SectionContentResponse,
    SectionEditorResponse,
    SectionContentSave,
    SectionRawContentSave,
    SectionRawSaveResponse,
)
from atlantic_cms.apps.cms.utils.section_resolver import resolve_section, resolve_page_sections, to_section_read
from atlantic_cms.apps.cms.utils.content_defaults import get_section_defaults, merge_with_defaults
from atlantic_cms.apps.cms.utils.section_templates import infer_template, hydrate_form_state, apply_raw_json
from atlantic_cms.apps.cms.utils.section_editor import get_live_section, save_section_content
from atlantic_cms.apps.cms.utils.slugs import generate_slug
from atlantic_cms.common.fields import parse_content_record
from atlantic_cms.common.soft_delete import get_live_row, set_deleted_flag

logger = logging.getLogger(__name__)

# Public reads, mounted under /api/content
public_router = APIRouter()

# Admin management, mounted under /api/cms
router = APIRouter()


def _set_cache_headers(response: Response) -> None:
    response.headers["Cache-Control"] = f"public, max-age={SECTION_CACHE_MAX_AGE}"


# ---------------------------------------------------------------------------
# Public content
# ---------------------------------------------------------------------------

@public_router.get("/pages", response_model=List[PageResponse], status_code=status.HTTP_200_OK)
async def get_public_pages(
    response: Response,
    session: AsyncSession = Depends(get_async_session),
):
    """
    Live pages ordered by title (empty list when unavailable)
    """
    _set_cache_headers(response)
    try:
        stmt = select(Page).where(Page.is_deleted == False).order_by(Page.title)
        result = await session.execute(stmt)
        return result.scalars().all()
    except Exception as e:
        logger.warning(f"Page listing failed, returning empty list: {e}")
        await reset_session(session)
        return []


@public_router.get("/pages/{page_slug}/sections", response_model=List[SectionRead], status_code=status.HTTP_200_OK)
async def get_page_sections(
    page_slug: str,
    response: Response,
    session: AsyncSession = Depends(get_async_session),
):
    """
    All live sections of a page in display order (empty list when unavailable)
    """
    _set_cache_headers(response)
    return await resolve_page_sections(page_slug, session)


@public_router.get("/pages/{page_slug}/sections/{section_name}", response_model=SectionContentResponse, status_code=status.HTTP_200_OK)
async def get_section_content(
    page_slug: str,
    section_name: str,
    response: Response,
    session: AsyncSession = Depends(get_async_session),
):
    """
    Stored content of one section; {} when the section is not configured or the backend failed
    """
    _set_cache_headers(response)
    content = await resolve_section(page_slug, section_name, session)
    return SectionContentResponse(page_slug=page_slug, section_name=section_name, content=content)


@public_router.get("/pages/{page_slug}/sections/{section_name}/rendered", response_model=SectionContentResponse, status_code=status.HTTP_200_OK)
async def get_rendered_section(
    page_slug: str,
    section_name: str,
    response: Response,
    session: AsyncSession = Depends(get_async_session),
):
    """
    Section content merged field by field with the built-in defaults
    """
    _set_cache_headers(response)
    content = await resolve_section(page_slug, section_name, session)
    merged = merge_with_defaults(content, get_section_defaults(page_slug, section_name))
    return SectionContentResponse(page_slug=page_slug, section_name=section_name, content=merged)


# ---------------------------------------------------------------------------
# Pages (admin)
# ---------------------------------------------------------------------------

@router.get("/pages", response_model=List[PageResponse], status_code=status.HTTP_200_OK)
async def list_pages(
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    List live pages ordered by title
    """
    try:
        stmt = select(Page).where(Page.is_deleted == False).order_by(Page.title)
        result = await session.execute(stmt)
        return result.scalars().all()
    except Exception as e:
        logger.error(f"Error listing pages: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error listing pages: {str(e)}"
        )


@router.post("/pages", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
async def create_page(
    request: PageCreate,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Create a page (slug generated from the title when not given)
    """
    slug = request.slug or generate_slug(request.title)
    if not slug:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="A slug could not be generated from the title"
        )

    try:
        stmt = select(Page).where(Page.slug == slug)
        result = await session.execute(stmt)
        if result.scalar_one_or_none():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Page with slug '{slug}' already exists"
            )

        page = Page(title=request.title, slug=slug)
        session.add(page)
        await session.commit()
        await session.refresh(page)

        logger.info(f"Page created: {page.slug}")
        return page
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error creating page: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error creating page: {str(e)}"
        )


@router.put("/pages/{page_id}", response_model=PageResponse, status_code=status.HTTP_200_OK)
async def update_page(
    page_id: UUID,
    request: PageUpdate,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Update title and/or slug of a live page
    """
    try:
        page = await get_live_row(session, Page, page_id)
        if not page:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Page not found: {page_id}"
            )

        if request.slug is not None and request.slug != page.slug:
            stmt = select(Page).where(Page.slug == request.slug)
            result = await session.execute(stmt)
            if result.scalar_one_or_none():
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Page with slug '{request.slug}' already exists"
                )
            page.slug = request.slug
        if request.title is not None:
            page.title = request.title

        session.add(page)
        await session.commit()
        await session.refresh(page)
        return page
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error updating page: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error updating page: {str(e)}"
        )


@router.delete("/pages/{page_id}", status_code=status.HTTP_200_OK)
async def delete_page(
    page_id: UUID,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Move a page to the recycle bin
    """
    try:
        page = await get_live_row(session, Page, page_id)
        if not page:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Page not found: {page_id}"
            )
        await set_deleted_flag(session, Page, page_id, True)
        await session.commit()
        logger.info(f"Page {page_id} moved to recycle bin")
        return {"success": True, "message": "Page moved to recycle bin."}
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error deleting page: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error deleting page: {str(e)}"
        )


# ---------------------------------------------------------------------------
# Sections (admin)
# ---------------------------------------------------------------------------

@router.get("/pages/{page_id}/sections", response_model=List[SectionRead], status_code=status.HTTP_200_OK)
async def list_sections(
    page_id: UUID,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    List the live sections of a page ordered by sort_order
    """
    try:
        stmt = (
            select(Section)
            .where(Section.page_id == page_id, Section.is_deleted == False)
            .order_by(Section.sort_order)
        )
        result = await session.execute(stmt)
        return [to_section_read(section) for section in result.scalars().all()]
    except Exception as e:
        logger.error(f"Error listing sections: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load sections: {str(e)}"
        )


@router.post("/sections", response_model=SectionRead, status_code=status.HTTP_201_CREATED)
async def create_section(
    request: SectionCreate,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Create a section at the end of its page
    """
    try:
        page = await get_live_row(session, Page, request.page_id)
        if not page:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Page not found: {request.page_id}"
            )

        stmt = select(func.max(Section.sort_order)).where(
            Section.page_id == request.page_id,
            Section.is_deleted == False,
        )
        result = await session.execute(stmt)
        max_order = result.scalar()
        sort_order = 0 if max_order is None else max_order + 1

        section = Section(
            page_id=request.page_id,
            name=request.name,
            content=request.content,
            sort_order=sort_order,
        )
        session.add(section)
        await session.commit()
        await session.refresh(section)

        logger.info(f"Section created: {page.slug}/{section.name}")
        return to_section_read(section)
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error creating section: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save section: {str(e)}"
        )


@router.put("/sections/{section_id}", response_model=SectionRead, status_code=status.HTTP_200_OK)
async def update_section(
    section_id: UUID,
    request: SectionUpdate,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Update name, content or sort order of a section
    """
    try:
        section = await get_live_section(section_id, session)
        if not section:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Section not found: {section_id}"
            )

        if request.name is not None:
            section.name = request.name
        if request.sort_order is not None:
            section.sort_order = request.sort_order
        if request.content is not None:
            section = await save_section_content(section, request.content, session)
        else:
            session.add(section)
            await session.commit()
            await session.refresh(section)

        return to_section_read(section)
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error updating section: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save section: {str(e)}"
        )


@router.delete("/sections/{section_id}", status_code=status.HTTP_200_OK)
async def delete_section(
    section_id: UUID,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Move a section to the recycle bin
    """
    try:
        section = await get_live_section(section_id, session)
        if not section:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Section not found: {section_id}"
            )
        await set_deleted_flag(session, Section, section_id, True)
        await session.commit()
        logger.info(f"Section {section_id} moved to recycle bin")
        return {"success": True, "message": "Section moved to recycle bin."}
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error deleting section: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete section: {str(e)}"
        )


# ---------------------------------------------------------------------------
# Section editor (admin)
# ---------------------------------------------------------------------------

@router.get("/sections/{section_id}/editor", response_model=SectionEditorResponse, status_code=status.HTTP_200_OK)
async def get_section_editor(
    section_id: UUID,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Form fields inferred from the section name plus the hydrated form state
    """
    section = await get_live_section(section_id, session)
    if not section:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Section not found: {section_id}"
        )

    template, fields = infer_template(section.name)
    return SectionEditorResponse(
        section_id=section.id,
        section_name=section.name,
        template=template,
        fields=fields,
        form_state=hydrate_form_state(parse_content_record(section.content)),
    )


@router.put("/sections/{section_id}/content", response_model=SectionRead, status_code=status.HTTP_200_OK)
async def save_section_editor(
    section_id: UUID,
    request: SectionContentSave,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Write the editor's full record back (last write wins)
    """
    try:
        section = await get_live_section(section_id, session)
        if not section:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Section not found: {section_id}"
            )
        section = await save_section_content(section, hydrate_form_state(request.content), session)
        return to_section_read(section)
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error saving section {section_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save changes."
        )


@router.put("/sections/{section_id}/content/raw", response_model=SectionRawSaveResponse, status_code=status.HTTP_200_OK)
async def save_section_raw(
    section_id: UUID,
    request: SectionRawContentSave,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Apply raw JSON from the editor; invalid JSON keeps the stored record
    """
    try:
        section = await get_live_section(section_id, session)
        if not section:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Section not found: {section_id}"
            )

        current_state = hydrate_form_state(parse_content_record(section.content))
        new_state, applied = apply_raw_json(current_state, request.raw)
        if applied:
            section = await save_section_content(section, new_state, session)

        return SectionRawSaveResponse(applied=applied, section=to_section_read(section))
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error saving raw content for {section_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save changes."
        )
