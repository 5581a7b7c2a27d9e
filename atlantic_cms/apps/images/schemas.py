"""
Pydantic schemas for the image library
"""
from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from datetime import datetime


class ImageAssetUpdate(BaseModel):
    alt_text: Optional[str] = Field(default=None, max_length=300)


class ImageAssetResponse(BaseModel):
    """Image asset response schema"""
    id: UUID
    section_id: Optional[UUID] = None
    file_path: str
    alt_text: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
