"""
Tests for the WebSocket channel and the connection registry.
"""
import asyncio
import json

from conftest import ADMIN_UID, send_message
from app.chat.connection_manager import ConnectionManager


class FakeWebSocket:
    """Records frames; optionally fails every write like a half-open socket."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    async def send_text(self, data: str) -> None:
        if self.fail:
            raise RuntimeError("connection reset by peer")
        self.sent.append(json.loads(data))


class TestConnectionManager:
    def test_push_to_registered_and_unregistered(self):
        async def scenario():
            manager = ConnectionManager()
            ws = FakeWebSocket()
            await manager.register("U1", ws)
            delivered = await manager.push("U1", {"type": "new_message"})
            missing = await manager.push("U2", {"type": "new_message"})
            return ws, delivered, missing

        ws, delivered, missing = asyncio.run(scenario())

        assert delivered is True
        assert missing is False
        assert ws.sent == [{"type": "new_message"}]

    def test_new_registration_replaces_previous(self):
        async def scenario():
            manager = ConnectionManager()
            old, new = FakeWebSocket(), FakeWebSocket()
            await manager.register("U1", old)
            await manager.register("U1", new)
            await manager.push("U1", {"type": "new_message"})
            return old, new

        old, new = asyncio.run(scenario())

        assert old.sent == []
        assert new.sent == [{"type": "new_message"}]

    def test_late_close_of_replaced_socket_keeps_successor(self):
        async def scenario():
            manager = ConnectionManager()
            old, new = FakeWebSocket(), FakeWebSocket()
            await manager.register("U1", old)
            await manager.register("U1", new)
            await manager.unregister("U1", old)
            return await manager.is_connected("U1")

        assert asyncio.run(scenario()) is True

    def test_unregister(self):
        async def scenario():
            manager = ConnectionManager()
            await manager.register("U1", FakeWebSocket())
            await manager.unregister("U1")
            await manager.unregister("U1")
            return await manager.push("U1", {"type": "new_message"})

        assert asyncio.run(scenario()) is False

    def test_failed_write_is_swallowed_and_entry_dropped(self):
        async def scenario():
            manager = ConnectionManager()
            await manager.register("U1", FakeWebSocket(fail=True))
            delivered = await manager.push("U1", {"type": "new_message"})
            return delivered, await manager.is_connected("U1")

        assert asyncio.run(scenario()) == (False, False)

    def test_payload_is_json_encoded_with_fallback(self):
        from datetime import datetime

        async def scenario():
            manager = ConnectionManager()
            ws = FakeWebSocket()
            await manager.register("U1", ws)
            await manager.push("U1", {"type": "new_message", "at": datetime(2026, 1, 2, 3, 4, 5)})
            return ws

        assert asyncio.run(scenario()).sent == [{"type": "new_message", "at": "2026-01-02 03:04:05"}]


class TestWebSocketEndpoint:
    def test_auth_handshake(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.send_json({"type": "auth", "uid": "U1"})

            assert ws.receive_json() == {"type": "auth_success", "uid": "U1"}

    def test_malformed_and_unknown_frames_are_ignored(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.send_text("not json")
            ws.send_json({"type": "typing"})
            ws.send_json({"type": "auth"})
            ws.send_json({"type": "auth", "uid": "U1"})

            assert ws.receive_json() == {"type": "auth_success", "uid": "U1"}

    def test_new_message_pushed_to_connected_receiver(self, chat_client):
        with chat_client.websocket_connect("/ws") as ws:
            ws.send_json({"type": "auth", "uid": ADMIN_UID})
            ws.receive_json()

            response = send_message(chat_client, "U1", ADMIN_UID, "hello")

            assert response.status_code == 201
            assert response.json()["delivered"] is True
            frame = ws.receive_json()
            assert frame["type"] == "new_message"
            assert frame["data"] == response.json()["chatMessage"]

    def test_receiver_without_connection_is_not_delivered(self, chat_client):
        with chat_client.websocket_connect("/ws") as ws:
            ws.send_json({"type": "auth", "uid": ADMIN_UID})
            ws.receive_json()

            response = send_message(chat_client, ADMIN_UID, "U2", "are you there?")

        assert response.status_code == 201
        assert response.json()["delivered"] is False

