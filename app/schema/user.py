"""
Firebase user schemas.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel


class FirebaseUserUpsert(BaseModel):
    """Body for POST /api/users/firebase, sent by the client after Firebase sign-in."""
    uid: str = Field(..., min_length=1, max_length=128)
    email: EmailStr
    display_name: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class UserResponse(BaseModel):
    id: int
    uid: str
    email: str
    display_name: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")
    is_admin: bool
    role: str
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class UserEnvelope(BaseModel):
    user: UserResponse


class AdminInfo(BaseModel):
    """Public admin fields needed by the chat client."""
    uid: str
    email: str
    display_name: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class AdminEnvelope(BaseModel):
    admin: AdminInfo
