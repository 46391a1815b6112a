"""
Message service: validate, persist, update the conversation summary, push.
"""
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.chat.connection_manager import ConnectionManager
from app.core.config import settings
from app.core.exceptions import StorageError, ValidationError
from app.crud import chat_message_crud, conversation_crud
from app.model.chat_message import ChatMessage
from app.schema.chat import Attachment, ChatMessageResponse
from app.service.conversation_service import ConversationService
from app.service.user_service import UserService
import logging

logger = logging.getLogger(__name__)

NEW_MESSAGE_EVENT = "new_message"


def message_to_payload(msg: ChatMessage) -> Dict[str, Any]:
    """Serialize a message the same way for HTTP responses and WebSocket frames."""
    return ChatMessageResponse.model_validate(msg).model_dump(mode="json", by_alias=True)


class MessageService:
    """Handles chat message creation and listing."""

    def __init__(self, db: Session, notifier: ConnectionManager):
        self.db = db
        self.notifier = notifier
        self.conversations = ConversationService(db)

    def _validate(self, sender_id: Any, receiver_id: Any, body: Any, attachment: Optional[Attachment]) -> None:
        errors: List[Dict[str, str]] = []
        for field, value in (("senderId", sender_id), ("receiverId", receiver_id)):
            if not isinstance(value, str) or not value.strip():
                errors.append({"field": field, "message": "Required non-empty string."})
        if not isinstance(body, str):
            errors.append({"field": "message", "message": "Must be a string."})
        elif not body.strip() and attachment is None:
            errors.append({"field": "message", "message": "Message cannot be empty without an attachment."})
        elif len(body) > settings.MESSAGE_MAX_LENGTH:
            errors.append(
                {"field": "message", "message": f"At most {settings.MESSAGE_MAX_LENGTH} characters."}
            )
        if errors:
            raise ValidationError(errors)

    async def send(
        self,
        sender_id: str,
        receiver_id: str,
        body: str,
        attachment: Optional[Attachment] = None,
    ) -> Tuple[ChatMessage, bool]:
        """Store a message and push it to the receiver.

        Returns (message, delivered); delivered only says a live connection
        took the write, not that the client saw it.
        """
        self._validate(sender_id, receiver_id, body, attachment)
        user_id, admin_id = UserService(self.db).resolve_roles(sender_id, receiver_id)

        conversation = self.conversations.get_or_create(user_id, admin_id)
        increment = 1 if receiver_id == conversation.admin_id else 0
        summary = body if body.strip() or attachment is None else (attachment.name or "")

        # Message row and conversation summary commit together
        try:
            msg = chat_message_crud.add_from_dict(
                self.db,
                obj_in={
                    "sender_id": sender_id,
                    "receiver_id": receiver_id,
                    "message": body,
                    "has_attachment": attachment is not None,
                    "attachment_url": attachment.url if attachment else None,
                    "attachment_type": attachment.type if attachment else None,
                    "attachment_name": attachment.name if attachment else None,
                },
            )
            conversation_crud.apply_message(
                self.db,
                conversation_id=conversation.id,
                last_message=summary,
                unread_increment=increment,
            )
            self.db.commit()
            self.db.refresh(msg)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to save chat message: %s", e)
            raise StorageError("Failed to save message. Please try again.")
        logger.info("Message %s stored from %s to %s", msg.id, sender_id, receiver_id)

        delivered = await self.notifier.push(
            receiver_id,
            {"type": NEW_MESSAGE_EVENT, "data": message_to_payload(msg)},
        )
        return msg, delivered

    def list_conversation(self, user_id: str, admin_id: str) -> List[ChatMessage]:
        try:
            return chat_message_crud.list_between(self.db, user_id=user_id, admin_id=admin_id)
        except SQLAlchemyError as e:
            logger.exception("Failed to list messages for %s/%s: %s", user_id, admin_id, e)
            raise StorageError()
