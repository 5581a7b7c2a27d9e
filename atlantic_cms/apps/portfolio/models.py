"""
Portfolio models
"""
from sqlmodel import Field
from typing import Optional
from uuid import UUID, uuid4

from atlantic_cms.common.fields import SoftDeleteFields


class PortfolioItem(SoftDeleteFields, table=True):
    """
    Portfolio item model
    Table: portfolio_items
    """
    __tablename__ = "portfolio_items"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=200)
    category: str = Field(max_length=50, index=True)
    description: Optional[str] = Field(default=None)
    thumbnail_image: Optional[str] = Field(default=None)
    video_url: Optional[str] = Field(default=None)
    client: Optional[str] = Field(default=None, max_length=200)
    is_featured: bool = Field(default=False)
    sort_order: int = Field(default=0)
