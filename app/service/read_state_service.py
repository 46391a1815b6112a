"""
Read-state tracker: marks messages read when the receiver opens a conversation.
"""
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import StorageError
from app.crud import chat_message_crud, conversation_crud
import logging

logger = logging.getLogger(__name__)


class ReadStateService:
    def __init__(self, db: Session):
        self.db = db

    def mark_read(self, receiver_id: str, sender_id: str) -> int:
        """Flip unread sender -> receiver messages to read.

        When the receiver is the admin of the pair's conversation its unread
        counter is reset to 0; the counter only tracks admin-directed messages.
        Summary text and last_message_time are left as they are.
        Returns the number of messages changed.
        """
        try:
            changed = chat_message_crud.mark_read(self.db, receiver_id=receiver_id, sender_id=sender_id)
            self.db.commit()
            conversation = conversation_crud.get_by_pair(self.db, user_id=sender_id, admin_id=receiver_id)
            if conversation and conversation.unread_count:
                conversation_crud.update(self.db, db_obj=conversation, obj_in={"unread_count": 0})
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to mark messages read for %s from %s: %s", receiver_id, sender_id, e)
            raise StorageError()

        if changed:
            logger.info("Marked %d message(s) from %s read by %s", changed, sender_id, receiver_id)
        return changed

    def mark_read_for_viewer(self, viewer_id: Optional[str], user_id: str, admin_id: str) -> bool:
        """Mark the viewer's incoming messages read when the viewer is one of the pair.

        Returns whether read-marking ran.
        """
        if not viewer_id:
            return False
        if viewer_id == admin_id:
            self.mark_read(receiver_id=admin_id, sender_id=user_id)
            return True
        if viewer_id == user_id:
            self.mark_read(receiver_id=user_id, sender_id=admin_id)
            return True
        return False
