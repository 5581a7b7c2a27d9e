"""
Pydantic schemas for uploads
"""
from pydantic import BaseModel
from typing import Optional


class UploadResponse(BaseModel):
    """Stored file"""
    path: str
    url: str
    content_type: Optional[str] = None
    size: int


class UploadRejectedResponse(BaseModel):
    reason: str
    message: str
