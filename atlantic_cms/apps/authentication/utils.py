"""
Authentication utilities
"""
from typing import List
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from supabase import create_client

from atlantic_cms.apps.authentication.models import UserRole
from atlantic_cms.config import get_supabase_url, get_supabase_token

logger = logging.getLogger(__name__)

# Singleton instance
_supabase_service = None


def get_supabase_client():
    """
    Get Supabase client instance (singleton pattern).

    Returns:
        Client: Supabase client instance
    """
    global _supabase_service

    if _supabase_service is None:
        try:
            _supabase_service = create_client(get_supabase_url(), get_supabase_token())
            logger.info("Supabase client initialized")
        except Exception as e:
            logger.error(f"Failed to initialize Supabase client: {str(e)}")
            raise

    return _supabase_service


async def fetch_user_roles(user_id: UUID, session: AsyncSession) -> List[str]:
    """Return every role granted to a Supabase user."""
    stmt = select(UserRole.role).where(UserRole.user_id == user_id)
    result = await session.execute(stmt)
    return list(result.scalars().all())
