"""
Pytest configuration and shared fixtures.

The database URL is forced to in-memory SQLite before any app import so the
engine in app.core.database never points at a real server.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DEBUG"] = "false"

import pytest
from fastapi.testclient import TestClient

from main import app
from app.core.config import settings
from app.core.database import Base, SessionLocal, engine
from app import model  # noqa: F401  registers tables

ADMIN_UID = "ADMIN"
ADMIN_EMAIL = settings.ADMIN_EMAIL


def register_user(client, uid: str, email: str, display_name: str = None, photo_url: str = None):
    """Register (or touch) a Firebase user through the API."""
    body = {"uid": uid, "email": email}
    if display_name is not None:
        body["displayName"] = display_name
    if photo_url is not None:
        body["photoURL"] = photo_url
    response = client.post("/api/users/firebase", json=body)
    assert response.status_code in (200, 201), response.text
    return response.json()["user"]


def send_message(client, sender_id: str, receiver_id: str, message: str, **extra):
    body = {"senderId": sender_id, "receiverId": receiver_id, "message": message}
    body.update(extra)
    return client.post("/api/messages", json=body)


@pytest.fixture(scope="function")
def client():
    """Test client with a fresh schema for each test."""
    Base.metadata.create_all(bind=engine)

    with TestClient(app) as test_client:
        yield test_client

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def chat_client(client):
    """Client with the admin and two regular users registered."""
    register_user(client, ADMIN_UID, ADMIN_EMAIL, display_name="Support")
    register_user(client, "U1", "u1@gmail.com", display_name="User One", photo_url="https://cdn.novatech.com/u1.png")
    register_user(client, "U2", "u2@gmail.com", display_name="User Two")
    return client


@pytest.fixture
def db_session(client):
    """ORM session on the same database the client uses."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
