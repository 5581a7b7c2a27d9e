"""
Authentication dependencies for FastAPI
Gate for every admin route: Supabase session check plus role lookup
"""
from typing import Optional
from uuid import UUID
from fastapi import Depends, HTTPException, status, Header, Cookie
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from atlantic_cms.database import get_async_session
from atlantic_cms.apps.authentication.schemas import AdminUser
from atlantic_cms.apps.authentication.utils import get_supabase_client, fetch_user_roles
from atlantic_cms.config import ADMIN_ROLE

logger = logging.getLogger(__name__)

# Security scheme for Swagger UI
security = HTTPBearer(auto_error=False)


def _extract_token(
    credentials: Optional[HTTPAuthorizationCredentials],
    authorization: Optional[str],
    access_token: Optional[str],
) -> Optional[str]:
    if credentials:
        return credentials.credentials
    if authorization:
        # Handle both "Bearer <token>" and direct token
        if authorization.startswith("Bearer "):
            return authorization[7:]
        return authorization
    return access_token


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    authorization: Optional[str] = Header(None),
    access_token: Optional[str] = Cookie(None),
    session: AsyncSession = Depends(get_async_session),
) -> AdminUser:
    """
    Dependency to get the current authenticated admin.

    The JWT comes from the Authorization header or the access_token cookie,
    is validated against Supabase, and the user must hold the admin role in
    user_roles. Failures are not retried.
    """
    jwt_token = _extract_token(credentials, authorization, access_token)

    if not jwt_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    try:
        supabase = get_supabase_client()
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service is not available",
        )

    try:
        response = supabase.auth.get_user(jwt_token)
        if not response or not response.user:
            raise ValueError("No user found in response")
    except Exception as e:
        logger.warning(f"Invalid JWT token provided: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="The provided token is invalid or expired",
        )

    try:
        user_id = UUID(str(response.user.id))
    except (ValueError, AttributeError) as e:
        logger.error(f"Invalid user ID format: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token contains invalid user information",
        )

    try:
        roles = await fetch_user_roles(user_id, session)
    except Exception as e:
        logger.error(f"Role lookup failed for {user_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not verify admin access",
        )

    if ADMIN_ROLE not in roles:
        logger.warning(f"User {user_id} is not an admin (roles: {roles})")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have permission to access the admin panel",
        )

    logger.info(f"Admin {user_id} authenticated successfully")
    return AdminUser(id=user_id, email=getattr(response.user, "email", None), role=ADMIN_ROLE)
