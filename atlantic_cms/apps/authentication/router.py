"""
Authentication router
Admin sign-in against Supabase email/password auth
"""
from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID
import logging

from atlantic_cms.database import get_async_session
from atlantic_cms.apps.authentication.schemas import (
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RefreshResponse,
    AdminUser,
)
from atlantic_cms.apps.authentication.dependencies import get_current_admin
from atlantic_cms.apps.authentication.utils import get_supabase_client, fetch_user_roles
from atlantic_cms.config import ADMIN_ROLE

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
async def login(
    request: LoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_async_session),
):
    """
    Sign an admin in with Supabase and set the access_token cookie.
    """
    logger.info("Attempting to log in user")

    try:
        supabase = get_supabase_client()
        auth_response = supabase.auth.sign_in_with_password(
            {"email": request.email, "password": request.password}
        )
    except Exception as e:
        logger.warning(f"Login failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    if not auth_response.user or not auth_response.session:
        logger.warning("Login failed: Invalid credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    try:
        roles = await fetch_user_roles(UUID(str(auth_response.user.id)), session)
    except Exception as e:
        logger.error(f"Role lookup failed during login: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not verify admin access"
        )

    response.set_cookie(
        key="access_token",
        value=auth_response.session.access_token,
        httponly=True,
        secure=True,
        samesite="strict",
        max_age=auth_response.session.expires_in,
    )

    logger.info(f"User logged in successfully, User ID: {auth_response.user.id}")

    return LoginResponse(
        message="Login successful",
        user_id=str(auth_response.user.id),
        access_token=auth_response.session.access_token,
        refresh_token=auth_response.session.refresh_token,
        expires_in=auth_response.session.expires_in,
        is_admin=ADMIN_ROLE in roles,
    )


@router.post("/refresh", response_model=RefreshResponse, status_code=status.HTTP_200_OK)
async def refresh(request: RefreshRequest):
    """
    Endpoint for refreshing access tokens using Supabase.
    """
    try:
        supabase = get_supabase_client()
        auth_response = supabase.auth.refresh_session(request.refresh_token)
    except Exception as e:
        logger.warning(f"Refresh failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token"
        )

    if not auth_response.user or not auth_response.session:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token"
        )

    return RefreshResponse(
        message="Access token refreshed successfully",
        access_token=auth_response.session.access_token,
        refresh_token=auth_response.session.refresh_token,
    )


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(response: Response):
    """
    Clear the authentication cookie.
    """
    response.set_cookie(
        key="access_token",
        value="",
        httponly=True,
        secure=True,
        samesite="strict",
        max_age=0,
    )
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=AdminUser, status_code=status.HTTP_200_OK)
async def me(current_admin: AdminUser = Depends(get_current_admin)):
    """Return the signed-in admin."""
    return current_admin
