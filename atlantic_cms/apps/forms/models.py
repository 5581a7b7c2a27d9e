"""
Public form models
"""
from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Text
from sqlalchemy.dialects.postgresql import JSONB
from typing import Optional, List
from uuid import UUID, uuid4
from datetime import datetime


class CreatorApplication(SQLModel, table=True):
    """
    Creator application model (written by the public site only)
    Table: creator_applications
    """
    __tablename__ = "creator_applications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    email: str = Field(max_length=255)
    role: str = Field(max_length=100)
    location: str = Field(max_length=100)
    portfolio_link: Optional[str] = Field(default=None)
    experience: str = Field(sa_column=Column(Text))
    file_urls: Optional[List[str]] = Field(default_factory=list, sa_column=Column(JSONB))
    created_at: datetime = Field(default_factory=datetime.now)
