"""
Authentication models
"""
from sqlmodel import SQLModel, Field
from uuid import UUID, uuid4
from datetime import datetime


class UserRole(SQLModel, table=True):
    """
    Role granted to a Supabase auth user
    Table: user_roles
    """
    __tablename__ = "user_roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(index=True)  # auth.users id issued by Supabase
    role: str = Field(max_length=50)  # e.g., "admin"
    created_at: datetime = Field(default_factory=datetime.now)
