"""
Chat schemas: messages and conversations.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from app.core.config import settings


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# --- Message ---

class MessageCreateBody(CamelModel):
    """Body for POST /api/messages."""
    sender_id: str = Field(..., min_length=1, max_length=128)
    receiver_id: str = Field(..., min_length=1, max_length=128)
    message: str = Field("", max_length=settings.MESSAGE_MAX_LENGTH)
    has_attachment: bool = False
    attachment_url: Optional[str] = Field(None, alias="attachmentURL")
    attachment_type: Optional[str] = None
    attachment_name: Optional[str] = None


class Attachment(CamelModel):
    """Optional file reference carried by a message."""
    url: Optional[str] = None
    type: Optional[str] = None
    name: Optional[str] = None


class ChatMessageResponse(CamelModel):
    id: int
    sender_id: str
    receiver_id: str
    message: str
    has_attachment: bool = False
    attachment_url: Optional[str] = Field(None, alias="attachmentURL")
    attachment_type: Optional[str] = None
    attachment_name: Optional[str] = None
    is_read: bool = False
    created_at: Optional[datetime] = None


class MessageCreatedResponse(CamelModel):
    chat_message: ChatMessageResponse
    delivered: bool = Field(..., description="A live connection existed for the receiver at push time.")


class MessageListResponse(CamelModel):
    messages: List[ChatMessageResponse]


# --- Conversation ---

class CounterpartProfile(CamelModel):
    """Public profile of the other participant."""
    uid: str
    email: str
    display_name: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")


class ConversationResponse(CamelModel):
    id: int
    user_id: str
    admin_id: str
    last_message: Optional[str] = None
    last_message_time: Optional[datetime] = None
    unread_count: int = 0
    created_at: Optional[datetime] = None
    counterpart: Optional[CounterpartProfile] = None


class ConversationListResponse(CamelModel):
    conversations: List[ConversationResponse]
