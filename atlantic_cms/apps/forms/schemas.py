"""
Pydantic schemas for the public forms
"""
from pydantic import BaseModel, EmailStr, Field, AnyHttpUrl, TypeAdapter, field_validator
from typing import Optional, List
from uuid import UUID
from datetime import datetime
import re

NAME_PATTERN = re.compile(r"^[a-zA-Z\s'-]+$")
PHONE_PATTERN = re.compile(r"^[\d\s\-+()]*$")

_url_adapter = TypeAdapter(AnyHttpUrl)


def sanitize_input(value: str) -> str:
    """Strip angle brackets, javascript: and inline on*= handlers."""
    value = re.sub(r"[<>]", "", value)
    value = re.sub(r"javascript:", "", value, flags=re.IGNORECASE)
    value = re.sub(r"on\w+=", "", value, flags=re.IGNORECASE)
    return value.strip()


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return sanitize_input(value)


def _require_clean(value: Optional[str], message: str) -> str:
    value = _clean(value)
    if not value:
        raise ValueError(message)
    return value


def _check_name(value: str) -> str:
    value = _clean(value)
    if not value:
        raise ValueError("Name is required")
    if not NAME_PATTERN.match(value):
        raise ValueError("Name contains invalid characters")
    return value


class ContactFormRequest(BaseModel):
    """Contact form submission"""
    name: str = Field(..., max_length=100)
    company: Optional[str] = Field(default="", max_length=100)
    email: EmailStr = Field(..., max_length=255)
    phone: Optional[str] = Field(default="", max_length=20)
    projectType: str = Field(..., min_length=1)
    timeline: Optional[str] = Field(default="", max_length=100)
    budget: Optional[str] = ""
    message: str = Field(..., max_length=2000)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _check_name(v)

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        v = _clean(v) or ""
        if not PHONE_PATTERN.match(v):
            raise ValueError("Phone contains invalid characters")
        return v

    @field_validator('company', 'timeline', 'budget')
    @classmethod
    def sanitize_text(cls, v):
        return _clean(v)

    @field_validator('projectType')
    @classmethod
    def validate_project_type(cls, v):
        return _require_clean(v, "Project type is required")

    @field_validator('message')
    @classmethod
    def validate_message(cls, v):
        return _require_clean(v, "Message is required")


class CreatorApplicationForm(BaseModel):
    """Creator application fields (files travel separately in the multipart body)"""
    name: str = Field(..., max_length=100)
    email: EmailStr = Field(..., max_length=255)
    role: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., max_length=100)
    portfolio_link: Optional[str] = None
    experience: str = Field(..., max_length=2000)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _check_name(v)

    @field_validator('role')
    @classmethod
    def validate_role(cls, v):
        return _require_clean(v, "Role is required")

    @field_validator('location', 'experience')
    @classmethod
    def required_text(cls, v):
        return _require_clean(v, "This field is required")

    @field_validator('portfolio_link')
    @classmethod
    def validate_portfolio_link(cls, v):
        v = (v or "").strip()
        if not v:
            return None
        _url_adapter.validate_python(v)
        return v


class FormSubmissionResponse(BaseModel):
    success: bool
    message: str


class CreatorApplicationResponse(BaseModel):
    """Creator application response schema"""
    id: UUID
    name: str
    email: str
    role: str
    location: str
    portfolio_link: Optional[str] = None
    file_urls: List[str] = Field(default_factory=list)
    created_at: datetime

    class Config:
        from_attributes = True
