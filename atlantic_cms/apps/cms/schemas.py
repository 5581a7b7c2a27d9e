"""
Pydantic schemas for CMS module
"""
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
from uuid import UUID
from datetime import datetime

from atlantic_cms.apps.cms.utils.section_templates import FieldDescriptor


# Pages
class PageCreate(BaseModel):
    """Create page schema; slug is generated from the title when omitted"""
    title: str = Field(..., min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, max_length=200)


class PageUpdate(BaseModel):
    """Update page schema"""
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=200)


class PageResponse(BaseModel):
    """Page response schema"""
    id: UUID
    title: str
    slug: str
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# Sections
class SectionCreate(BaseModel):
    """Create section schema"""
    page_id: UUID
    name: str = Field(..., min_length=1, max_length=100)
    content: Dict[str, Any] = Field(default_factory=dict)


class SectionUpdate(BaseModel):
    """Update section schema"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    content: Optional[Dict[str, Any]] = None
    sort_order: Optional[int] = None


class SectionRead(BaseModel):
    """Section with its content record normalized"""
    id: UUID
    page_id: UUID
    name: str
    content: Dict[str, Any]
    sort_order: int
    is_deleted: bool = False
    updated_at: datetime


class SectionContentResponse(BaseModel):
    """Resolved content of one section ({} when nothing usable is stored)"""
    page_slug: str
    section_name: str
    content: Dict[str, Any]


# Editor
class SectionEditorResponse(BaseModel):
    """Form inferred for a section plus its hydrated state"""
    section_id: UUID
    section_name: str
    template: str
    fields: List[FieldDescriptor]
    form_state: Dict[str, Any]


class SectionContentSave(BaseModel):
    """Full content record written back by the editor"""
    content: Dict[str, Any]


class SectionRawContentSave(BaseModel):
    """Raw JSON text from the editor's escape hatch"""
    raw: str


class SectionRawSaveResponse(BaseModel):
    applied: bool
    section: SectionRead
