"""
Chat messages API (REST). Pushes go through the application's ConnectionManager.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.chat.connection_manager import ConnectionManager
from app.core.database import get_db
from app.core.dependencies import get_acting_user_id, get_notifier
from app.schema.chat import (
    Attachment,
    ChatMessageResponse,
    MessageCreateBody,
    MessageCreatedResponse,
    MessageListResponse,
)
from app.service.message_service import MessageService
from app.service.read_state_service import ReadStateService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=MessageCreatedResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    body: MessageCreateBody,
    db: Session = Depends(get_db),
    notifier: ConnectionManager = Depends(get_notifier),
):
    """Store a message, update the conversation and push new_message to the receiver if connected."""
    attachment = None
    if body.has_attachment:
        attachment = Attachment(
            url=body.attachment_url,
            type=body.attachment_type,
            name=body.attachment_name,
        )
    msg, delivered = await MessageService(db, notifier).send(
        body.sender_id,
        body.receiver_id,
        body.message,
        attachment=attachment,
    )
    return MessageCreatedResponse(
        chat_message=ChatMessageResponse.model_validate(msg),
        delivered=delivered,
    )


@router.get("/{user_id}/{admin_id}", response_model=MessageListResponse)
async def list_messages(
    user_id: str,
    admin_id: str,
    acting_user_id: Optional[str] = Depends(get_acting_user_id),
    db: Session = Depends(get_db),
    notifier: ConnectionManager = Depends(get_notifier),
):
    """Messages between the pair, oldest first.

    Messages addressed to the X-User-ID caller are marked read first. The
    header is taken as given.
    """
    ReadStateService(db).mark_read_for_viewer(acting_user_id, user_id=user_id, admin_id=admin_id)
    messages = MessageService(db, notifier).list_conversation(user_id, admin_id)
    return MessageListResponse(messages=[ChatMessageResponse.model_validate(m) for m in messages])
