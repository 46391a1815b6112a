"""
Chat message model. Immutable apart from is_read (false -> true only).
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from sqlalchemy.sql import func
from app.core.database import Base


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(String, nullable=False, index=True)  # Firebase UID
    receiver_id = Column(String, nullable=False, index=True)  # Firebase UID
    message = Column(Text, nullable=False)
    has_attachment = Column(Boolean, nullable=False, default=False)
    attachment_url = Column(String, nullable=True)
    attachment_type = Column(String, nullable=True)
    attachment_name = Column(String, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
