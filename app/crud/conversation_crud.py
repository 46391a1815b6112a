"""
Conversation CRUD.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session

from app.model.conversation import Conversation
from app.crud.base import CRUDBase


class CRUDConversation(CRUDBase[Conversation, Dict[str, Any], Dict[str, Any]]):
    def get_by_pair(self, db: Session, *, user_id: str, admin_id: str) -> Optional[Conversation]:
        return (
            db.query(self.model)
            .filter(
                self.model.user_id == user_id,
                self.model.admin_id == admin_id,
            )
            .first()
        )

    def apply_message(
        self, db: Session, *, conversation_id: int, last_message: Optional[str], unread_increment: int
    ) -> None:
        """Record a new message on the summary. The counter is bumped in SQL. Caller commits."""
        db.query(self.model).filter(self.model.id == conversation_id).update(
            {
                self.model.last_message: last_message,
                self.model.last_message_time: datetime.now(timezone.utc),
                self.model.unread_count: self.model.unread_count + unread_increment,
            },
            synchronize_session=False,
        )

    def list_by_admin(self, db: Session, *, admin_id: str) -> List[Conversation]:
        return (
            db.query(self.model)
            .filter(self.model.admin_id == admin_id)
            .order_by(desc(self.model.last_message_time), desc(self.model.id))
            .all()
        )

    def list_by_user(self, db: Session, *, user_id: str) -> List[Conversation]:
        return (
            db.query(self.model)
            .filter(self.model.user_id == user_id)
            .order_by(desc(self.model.last_message_time), desc(self.model.id))
            .all()
        )


conversation_crud = CRUDConversation(Conversation)
