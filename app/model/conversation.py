"""
Conversation model. Pairs one non-admin user with the admin and keeps a
denormalized summary of the latest message.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from app.core.database import Base


class Conversation(Base):
    __tablename__ = "conversations"
    __table_args__ = (UniqueConstraint("user_id", "admin_id", name="uq_conversations_user_admin"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False, index=True)  # non-admin Firebase UID
    admin_id = Column(String, nullable=False, index=True)  # admin Firebase UID
    last_message = Column(Text, nullable=True)
    last_message_time = Column(DateTime(timezone=True), nullable=True)
    unread_count = Column(Integer, nullable=False, default=0)  # admin-directed, not yet read
    created_at = Column(DateTime(timezone=True), server_default=func.now())
