"""
In-memory connection registry for chat WebSocket: one live connection per user uid.
"""
import asyncio
import json
import logging
from typing import Any, Dict, Optional

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Maps a participant uid to its live WebSocket and pushes events to it.

    A new registration for the same uid replaces the previous one. Pushes are
    best-effort: no acknowledgment, no retry, nothing is queued for offline
    receivers.
    """

    def __init__(self) -> None:
        # uid -> WebSocket
        self._connections: Dict[str, WebSocket] = {}
        self._lock = asyncio.Lock()

    async def register(self, uid: str, websocket: WebSocket) -> None:
        async with self._lock:
            replaced = self._connections.get(uid)
            self._connections[uid] = websocket
        if replaced is not None and replaced is not websocket:
            logger.info("Replaced ws connection for user %s", uid)
        else:
            logger.info("Registered ws connection for user %s", uid)

    async def unregister(self, uid: str, websocket: Optional[WebSocket] = None) -> None:
        """Remove uid's entry; with websocket given, only if it is still the registered one."""
        async with self._lock:
            current = self._connections.get(uid)
            if current is None:
                return
            if websocket is not None and current is not websocket:
                return
            del self._connections[uid]
        logger.info("Unregistered ws connection for user %s", uid)

    async def is_connected(self, uid: str) -> bool:
        async with self._lock:
            return uid in self._connections

    async def push(self, uid: str, payload: Dict[str, Any]) -> bool:
        """Send a JSON frame to uid's connection. Returns whether a write went out."""
        async with self._lock:
            websocket = self._connections.get(uid)
        if websocket is None:
            logger.debug("No ws connection for user %s; push skipped", uid)
            return False
        try:
            await websocket.send_text(json.dumps(payload, default=str))
        except Exception as e:
            logger.warning("Push to user %s failed: %s", uid, e)
            await self.unregister(uid, websocket)
            return False
        return True
