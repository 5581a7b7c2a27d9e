"""
Pydantic schemas for portfolio module
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from uuid import UUID
from datetime import datetime

PORTFOLIO_CATEGORIES = [
    "Photography",
    "Videography",
    "Documentary",
    "Commercial",
    "Events",
    "Tourism",
    "Podcast",
]


def check_category(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in PORTFOLIO_CATEGORIES:
        raise ValueError(f"Category must be one of: {', '.join(PORTFOLIO_CATEGORIES)}")
    return value


class PortfolioItemCreate(BaseModel):
    """Create portfolio item schema"""
    title: str = Field(..., min_length=1, max_length=200)
    category: str
    description: Optional[str] = None
    thumbnail_image: Optional[str] = None
    video_url: Optional[str] = None
    client: Optional[str] = Field(default=None, max_length=200)
    is_featured: bool = False
    sort_order: int = 0

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        return check_category(v)


class PortfolioItemUpdate(BaseModel):
    """Update portfolio item schema"""
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    category: Optional[str] = None
    description: Optional[str] = None
    thumbnail_image: Optional[str] = None
    video_url: Optional[str] = None
    client: Optional[str] = Field(default=None, max_length=200)
    is_featured: Optional[bool] = None
    sort_order: Optional[int] = None

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        return check_category(v)


class PortfolioItemResponse(BaseModel):
    """Portfolio item response schema"""
    id: UUID
    title: str
    category: str
    description: Optional[str] = None
    thumbnail_image: Optional[str] = None
    video_url: Optional[str] = None
    client: Optional[str] = None
    is_featured: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
