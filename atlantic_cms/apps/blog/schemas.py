"""
Pydantic schemas for blog module
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Union
from uuid import UUID
from datetime import datetime

from atlantic_cms.common.fields import parse_string_list


def normalize_tags(value: Union[List[str], str, None]) -> Optional[List[str]]:
    """Tags come as a list or as "a, b, c"; blanks are dropped."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    return [str(tag).strip() for tag in value if str(tag).strip()]


class BlogPostCreate(BaseModel):
    """Create blog post schema"""
    title: str = Field(..., min_length=1, max_length=300)
    slug: Optional[str] = Field(default=None, max_length=300)
    excerpt: Optional[str] = None
    content: Optional[str] = None
    cover_image: Optional[str] = None
    tags: Optional[List[str]] = Field(default_factory=list)
    is_published: bool = False

    @field_validator('tags', mode='before')
    @classmethod
    def split_tags(cls, v):
        return normalize_tags(v) or []


class BlogPostUpdate(BaseModel):
    """Update blog post schema"""
    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=300)
    excerpt: Optional[str] = None
    content: Optional[str] = None
    cover_image: Optional[str] = None
    tags: Optional[List[str]] = None
    is_published: Optional[bool] = None

    @field_validator('tags', mode='before')
    @classmethod
    def split_tags(cls, v):
        return normalize_tags(v)


class BlogPostResponse(BaseModel):
    """Blog post response schema"""
    id: UUID
    title: str
    slug: str
    excerpt: Optional[str] = None
    content: Optional[str] = None
    cover_image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_published: bool
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @field_validator('tags', mode='before')
    @classmethod
    def parse_tags(cls, v):
        return parse_string_list(v)

    class Config:
        from_attributes = True
