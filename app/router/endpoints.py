"""
API Router - all endpoints.
"""
from fastapi import APIRouter
from app.router.api import contacts, conversations, messages, users
from app.router import realtime

api_router = APIRouter(prefix="/api")

api_router.include_router(
    contacts.router,
    prefix="/contact",
    tags=["Contact"],
)

api_router.include_router(
    users.router,
    tags=["Users"],
)

api_router.include_router(
    messages.router,
    prefix="/messages",
    tags=["Messages"],
)

api_router.include_router(
    conversations.router,
    prefix="/conversations",
    tags=["Conversations"],
)

ws_router = realtime.router
