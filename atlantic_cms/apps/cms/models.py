"""
CMS models for page and section content
"""
from sqlmodel import Field, Column
from sqlalchemy.dialects.postgresql import JSONB
from typing import Optional, Dict, Any
from uuid import UUID, uuid4

from atlantic_cms.common.fields import SoftDeleteFields


class Page(SoftDeleteFields, table=True):
    """
    CMS Page model
    Table: pages
    """
    __tablename__ = "pages"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=200)
    slug: str = Field(max_length=200, unique=True, index=True)  # e.g., "home", "about"


class Section(SoftDeleteFields, table=True):
    """
    CMS Section model
    Table: sections

    (page_id, name) is unique by convention only; content has no fixed schema.
    """
    __tablename__ = "sections"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    page_id: UUID = Field(foreign_key="pages.id", index=True, ondelete="CASCADE")
    name: str = Field(max_length=100, index=True)  # e.g., "hero", "cta", "featured-work"
    content: Optional[Dict[str, Any]] = Field(default_factory=dict, sa_column=Column(JSONB))
    sort_order: int = Field(default=0)
