"""
Blog models
"""
from sqlmodel import Field, Column
from sqlalchemy import Text
from sqlalchemy.dialects.postgresql import JSONB
from typing import Optional, List
from uuid import UUID, uuid4
from datetime import datetime

from atlantic_cms.common.fields import SoftDeleteFields


class BlogPost(SoftDeleteFields, table=True):
    """
    Blog post model
    Table: blog_posts

    published_at means "last published at": unpublishing keeps it.
    """
    __tablename__ = "blog_posts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=300)
    slug: str = Field(max_length=300, unique=True, index=True)
    excerpt: Optional[str] = Field(default=None)
    content: Optional[str] = Field(default=None, sa_column=Column(Text))
    cover_image: Optional[str] = Field(default=None)
    tags: Optional[List[str]] = Field(default_factory=list, sa_column=Column(JSONB))
    is_published: bool = Field(default=False, index=True)
    published_at: Optional[datetime] = Field(default=None)
