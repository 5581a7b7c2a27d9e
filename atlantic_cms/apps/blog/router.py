"""
Blog router
Public reads of published posts and admin management
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List
from uuid import UUID
from datetime import datetime
import logging

from atlantic_cms.database import get_async_session
from atlantic_cms.apps.authentication.dependencies import get_current_admin
from atlantic_cms.apps.authentication.schemas import AdminUser
from atlantic_cms.apps.blog.models import BlogPost
from atlantic_cms.apps.blog.schemas import BlogPostCreate, BlogPostUpdate, BlogPostResponse
from atlantic_cms.apps.blog.utils.publishing import apply_publish_state
from atlantic_cms.apps.cms.utils.slugs import generate_slug
from atlantic_cms.common.soft_delete import get_live_row, set_deleted_flag

logger = logging.getLogger(__name__)

router = APIRouter()


async def _slug_taken(session: AsyncSession, slug: str) -> bool:
    stmt = select(BlogPost.id).where(BlogPost.slug == slug)
    result = await session.execute(stmt)
    return result.scalar_one_or_none() is not None


async def _get_post_or_404(session: AsyncSession, post_id: UUID) -> BlogPost:
    post = await get_live_row(session, BlogPost, post_id)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Blog post not found: {post_id}"
        )
    return post


@router.get("/posts", response_model=List[BlogPostResponse], status_code=status.HTTP_200_OK)
async def list_published_posts(
    session: AsyncSession = Depends(get_async_session),
):
    """
    Published posts, newest first
    """
    try:
        stmt = (
            select(BlogPost)
            .where(BlogPost.is_deleted == False, BlogPost.is_published == True)
            .order_by(BlogPost.published_at.desc(), BlogPost.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()
    except Exception as e:
        logger.error(f"Error listing blog posts: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error listing blog posts: {str(e)}"
        )


@router.get("/posts/{slug}", response_model=BlogPostResponse, status_code=status.HTTP_200_OK)
async def get_published_post(
    slug: str,
    session: AsyncSession = Depends(get_async_session),
):
    stmt = select(BlogPost).where(
        BlogPost.slug == slug,
        BlogPost.is_deleted == False,
        BlogPost.is_published == True,
    )
    result = await session.execute(stmt)
    post = result.scalar_one_or_none()
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Blog post not found: {slug}"
        )
    return post


@router.get("/admin/posts", response_model=List[BlogPostResponse], status_code=status.HTTP_200_OK)
async def list_all_posts(
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Drafts and published posts, most recently created first
    """
    stmt = select(BlogPost).where(BlogPost.is_deleted == False).order_by(BlogPost.created_at.desc())
    result = await session.execute(stmt)
    return result.scalars().all()


@router.post("/admin/posts", response_model=BlogPostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: BlogPostCreate,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    slug = request.slug or generate_slug(request.title)
    if not slug:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="A slug could not be generated from the title"
        )

    try:
        if await _slug_taken(session, slug):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Blog post with slug '{slug}' already exists"
            )

        post = BlogPost(
            title=request.title,
            slug=slug,
            excerpt=request.excerpt,
            content=request.content,
            cover_image=request.cover_image,
            tags=request.tags or [],
        )
        apply_publish_state(post, request.is_published)
        session.add(post)
        await session.commit()
        await session.refresh(post)

        logger.info(f"Blog post created: {post.slug} (published: {post.is_published})")
        return post
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error creating blog post: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save post: {str(e)}"
        )


@router.put("/admin/posts/{post_id}", response_model=BlogPostResponse, status_code=status.HTTP_200_OK)
async def update_post(
    post_id: UUID,
    request: BlogPostUpdate,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    try:
        post = await _get_post_or_404(session, post_id)

        if request.slug is not None and request.slug != post.slug:
            if await _slug_taken(session, request.slug):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Blog post with slug '{request.slug}' already exists"
                )
            post.slug = request.slug

        for attribute in ("title", "excerpt", "content", "cover_image", "tags"):
            value = getattr(request, attribute)
            if value is not None:
                setattr(post, attribute, value)

        if request.is_published is not None:
            apply_publish_state(post, request.is_published)

        post.updated_at = datetime.now()
        session.add(post)
        await session.commit()
        await session.refresh(post)
        return post
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error updating blog post {post_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save post: {str(e)}"
        )


@router.post("/admin/posts/{post_id}/toggle-publish", response_model=BlogPostResponse, status_code=status.HTTP_200_OK)
async def toggle_publish(
    post_id: UUID,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Flip the published flag; published_at only moves when publishing
    """
    try:
        post = await _get_post_or_404(session, post_id)
        apply_publish_state(post, not post.is_published)
        post.updated_at = datetime.now()
        session.add(post)
        await session.commit()
        await session.refresh(post)

        logger.info(f"Blog post {post_id} is_published -> {post.is_published}")
        return post
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error toggling blog post {post_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update post: {str(e)}"
        )


@router.delete("/admin/posts/{post_id}", status_code=status.HTTP_200_OK)
async def delete_post(
    post_id: UUID,
    session: AsyncSession = Depends(get_async_session),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Move a post to the recycle bin
    """
    try:
        await _get_post_or_404(session, post_id)
        await set_deleted_flag(session, BlogPost, post_id, True)
        await session.commit()
        logger.info(f"Blog post {post_id} moved to recycle bin")
        return {"success": True, "message": "Post moved to recycle bin."}
    except HTTPException:
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"Error deleting blog post {post_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete post: {str(e)}"
        )
