"""
FastAPI dependencies shared by routers.
"""
from typing import Optional
from fastapi import Request
from starlette.requests import HTTPConnection
from app.chat.connection_manager import ConnectionManager


def get_acting_user_id(request: Request) -> Optional[str]:
    """Caller id taken from the X-User-ID header by ActingUserMiddleware."""
    return getattr(request.state, "acting_user_id", None)


def get_notifier(connection: HTTPConnection) -> ConnectionManager:
    """Application-owned connection registry (works for HTTP and WebSocket routes)."""
    return connection.app.state.notifier
