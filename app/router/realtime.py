"""
Real-time channel: one WebSocket per participant, authenticated by an auth frame.

Client -> server: {"type": "auth", "uid": "<firebase uid>"}
Server -> client: {"type": "auth_success", "uid": ...} and {"type": "new_message", "data": {...}}
"""
import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from app.chat.connection_manager import ConnectionManager
from app.core.dependencies import get_notifier

router = APIRouter()
logger = logging.getLogger(__name__)

AUTH_FRAME = "auth"
AUTH_SUCCESS_FRAME = "auth_success"


@router.websocket("/ws")
async def websocket_notifications(
    websocket: WebSocket,
    notifier: ConnectionManager = Depends(get_notifier),
):
    """Registers the connection under the uid from the auth frame until it closes."""
    await websocket.accept()
    uid: Optional[str] = None
    try:
        while True:
            data = await websocket.receive_text()
            try:
                frame = json.loads(data)
            except json.JSONDecodeError:
                logger.debug("Ignoring non-JSON ws frame")
                continue
            if not isinstance(frame, dict) or frame.get("type") != AUTH_FRAME:
                logger.debug("Ignoring ws frame: %r", frame)
                continue
            frame_uid = frame.get("uid")
            if not isinstance(frame_uid, str) or not frame_uid.strip():
                logger.debug("Ignoring auth frame without uid")
                continue
            frame_uid = frame_uid.strip()
            if uid and uid != frame_uid:
                await notifier.unregister(uid, websocket)
            uid = frame_uid
            await notifier.register(uid, websocket)
            await websocket.send_text(json.dumps({"type": AUTH_SUCCESS_FRAME, "uid": uid}))
    except WebSocketDisconnect:
        logger.info("WebSocket closed for user %s", uid)
    except Exception as e:
        logger.warning("WebSocket closed: %s", e)
    finally:
        if uid:
            await notifier.unregister(uid, websocket)
