"""
Chat message CRUD.
"""
from typing import Any, Dict, List
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from app.model.chat_message import ChatMessage
from app.crud.base import CRUDBase


class CRUDChatMessage(CRUDBase[ChatMessage, Dict[str, Any], Dict[str, Any]]):
    def list_between(self, db: Session, *, user_id: str, admin_id: str) -> List[ChatMessage]:
        """Messages exchanged in either direction, oldest first (id breaks timestamp ties)."""
        return (
            db.query(self.model)
            .filter(
                or_(
                    and_(self.model.sender_id == user_id, self.model.receiver_id == admin_id),
                    and_(self.model.sender_id == admin_id, self.model.receiver_id == user_id),
                )
            )
            .order_by(self.model.created_at, self.model.id)
            .all()
        )

    def mark_read(self, db: Session, *, receiver_id: str, sender_id: str) -> int:
        """Flip is_read on unread sender -> receiver messages. Caller commits. Returns rows changed."""
        return (
            db.query(self.model)
            .filter(
                self.model.receiver_id == receiver_id,
                self.model.sender_id == sender_id,
                self.model.is_read.is_(False),
            )
            .update({self.model.is_read: True}, synchronize_session=False)
        )


chat_message_crud = CRUDChatMessage(ChatMessage)
