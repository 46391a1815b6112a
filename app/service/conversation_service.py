"""
Conversation resolver: find-or-create the (user, admin) thread and keep its
denormalized last-message summary.
"""
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import NotFound, StorageError
from app.crud import conversation_crud, user_crud
from app.model.conversation import Conversation
from app.schema.chat import ConversationResponse, CounterpartProfile
import logging

logger = logging.getLogger(__name__)


class ConversationService:
    def __init__(self, db: Session):
        self.db = db

    def get_or_create(self, user_id: str, admin_id: str) -> Conversation:
        """Existing conversation for the pair, unchanged; otherwise a new one with unread_count 0."""
        try:
            conversation = conversation_crud.get_by_pair(self.db, user_id=user_id, admin_id=admin_id)
            if conversation:
                return conversation
            try:
                conversation = conversation_crud.create_from_dict(
                    self.db,
                    obj_in={"user_id": user_id, "admin_id": admin_id, "unread_count": 0},
                )
            except IntegrityError:
                # Lost the race against a concurrent first message; uq_conversations_user_admin held
                self.db.rollback()
                conversation = conversation_crud.get_by_pair(self.db, user_id=user_id, admin_id=admin_id)
                if not conversation:
                    raise
                return conversation
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to resolve conversation %s/%s: %s", user_id, admin_id, e)
            raise StorageError()
        logger.info("Conversation %s created for user %s and admin %s", conversation.id, user_id, admin_id)
        return conversation

    def update(
        self,
        conversation_id: int,
        last_message: Optional[str],
        unread_count: Optional[int] = None,
    ) -> Conversation:
        """Set last message and refresh its timestamp. unread_count is kept when omitted."""
        update_data = {
            "last_message": last_message,
            "last_message_time": datetime.now(timezone.utc),
        }
        if unread_count is not None:
            update_data["unread_count"] = unread_count
        try:
            conversation = conversation_crud.get(self.db, conversation_id)
            if not conversation:
                raise NotFound("Conversation")
            return conversation_crud.update(self.db, db_obj=conversation, obj_in=update_data)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to update conversation %s: %s", conversation_id, e)
            raise StorageError()

    def list_for_admin(self, admin_id: str) -> List[ConversationResponse]:
        try:
            conversations = conversation_crud.list_by_admin(self.db, admin_id=admin_id)
            return self._with_counterparts(conversations, counterpart_attr="user_id")
        except SQLAlchemyError as e:
            logger.exception("Failed to list conversations for admin %s: %s", admin_id, e)
            raise StorageError()

    def list_for_user(self, user_id: str) -> List[ConversationResponse]:
        try:
            conversations = conversation_crud.list_by_user(self.db, user_id=user_id)
            return self._with_counterparts(conversations, counterpart_attr="admin_id")
        except SQLAlchemyError as e:
            logger.exception("Failed to list conversations for user %s: %s", user_id, e)
            raise StorageError()

    def _with_counterparts(
        self, conversations: List[Conversation], counterpart_attr: str
    ) -> List[ConversationResponse]:
        uids = [getattr(c, counterpart_attr) for c in conversations]
        profiles = user_crud.get_many_by_uid(self.db, uids)
        items: List[ConversationResponse] = []
        for conversation in conversations:
            profile = profiles.get(getattr(conversation, counterpart_attr))
            item = ConversationResponse.model_validate(conversation)
            if profile:
                item.counterpart = CounterpartProfile.model_validate(profile)
            items.append(item)
        return items
