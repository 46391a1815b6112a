"""
Conversations API: thread lists for the admin inbox and for a user.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schema.chat import ConversationListResponse
from app.service.conversation_service import ConversationService

router = APIRouter()


@router.get("/admin/{admin_id}", response_model=ConversationListResponse)
async def list_admin_conversations(admin_id: str, db: Session = Depends(get_db)):
    """Admin inbox, latest activity first; counterpart is the user."""
    return ConversationListResponse(conversations=ConversationService(db).list_for_admin(admin_id))


@router.get("/user/{user_id}", response_model=ConversationListResponse)
async def list_user_conversations(user_id: str, db: Session = Depends(get_db)):
    """A user's threads; counterpart is the admin."""
    return ConversationListResponse(conversations=ConversationService(db).list_for_user(user_id))
