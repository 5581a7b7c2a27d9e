"""
Image library models
"""
from sqlmodel import Field
from typing import Optional
from uuid import UUID, uuid4

from atlantic_cms.common.fields import SoftDeleteFields


class ImageAsset(SoftDeleteFields, table=True):
    """
    Image asset model
    Table: image_assets
    """
    __tablename__ = "image_assets"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    section_id: Optional[UUID] = Field(default=None, foreign_key="sections.id", ondelete="SET NULL")
    file_path: str  # public URL of the stored object
    alt_text: Optional[str] = Field(default=None)
