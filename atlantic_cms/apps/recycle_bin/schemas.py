"""
Pydantic schemas for the recycle bin
"""
from pydantic import BaseModel
from typing import Literal
from uuid import UUID
from datetime import datetime

ItemType = Literal["page", "section", "image", "portfolio", "blog"]


class DeletedItem(BaseModel):
    """One soft-deleted row, whatever table it lives in"""
    id: UUID
    type: ItemType
    title: str
    deleted_at: datetime


class RecycleBinActionResponse(BaseModel):
    success: bool
    message: str
