"""
Pydantic schemas for authentication
"""
from pydantic import BaseModel, EmailStr
from typing import Optional
from uuid import UUID


class LoginRequest(BaseModel):
    """Login request schema"""
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    """Login response schema"""
    message: str
    user_id: str
    access_token: str
    refresh_token: str
    expires_in: int
    is_admin: bool


class RefreshRequest(BaseModel):
    """Refresh token request schema"""
    refresh_token: str


class RefreshResponse(BaseModel):
    """Refresh token response schema"""
    message: str
    access_token: str
    refresh_token: str


class AdminUser(BaseModel):
    """Authenticated admin resolved from a Supabase session"""
    id: UUID
    email: Optional[str] = None
    role: str
