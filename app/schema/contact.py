"""
Contact form schemas.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class ContactCreate(BaseModel):
    """Body for POST /api/contact."""
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=5000)

    @field_validator("phone", mode="before")
    @classmethod
    def blank_phone_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ContactResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    created_at: datetime

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ContactCreatedResponse(BaseModel):
    message: str
    contact: ContactResponse


class ContactListResponse(BaseModel):
    contacts: List[ContactResponse]
