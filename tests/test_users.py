"""
Tests for the Firebase user registry and admin lookup.
"""
from conftest import ADMIN_EMAIL, ADMIN_UID, register_user


class TestUpsertFirebaseUser:
    def test_first_sign_in_creates_user(self, client):
        response = client.post(
            "/api/users/firebase",
            json={"uid": "U1", "email": "u1@gmail.com", "displayName": "User One", "photoURL": "https://x/y.png"},
        )

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["uid"] == "U1"
        assert user["email"] == "u1@gmail.com"
        assert user["displayName"] == "User One"
        assert user["photoURL"] == "https://x/y.png"
        assert user["isAdmin"] is False
        assert user["role"] == "user"
        assert user["createdAt"]
        assert user["lastLogin"]

    def test_admin_email_granted_admin_role(self, client):
        user = register_user(client, ADMIN_UID, ADMIN_EMAIL)

        assert user["isAdmin"] is True
        assert user["role"] == "admin"

    def test_repeat_sign_in_touches_last_login(self, client):
        first = register_user(client, "U1", "u1@gmail.com")

        response = client.post("/api/users/firebase", json={"uid": "U1", "email": "u1@gmail.com"})

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["id"] == first["id"]
        assert user["lastLogin"] >= first["lastLogin"]

    def test_missing_uid_rejected(self, client):
        response = client.post("/api/users/firebase", json={"email": "u1@gmail.com"})

        assert response.status_code == 400
        assert response.json()["detail"]["errors"][0]["field"] == "uid"


class TestGetFirebaseUser:
    def test_found(self, client):
        register_user(client, "U1", "u1@gmail.com")

        response = client.get("/api/users/firebase", params={"uid": "U1"})

        assert response.status_code == 200
        assert response.json()["user"]["uid"] == "U1"

    def test_unknown_uid(self, client):
        response = client.get("/api/users/firebase", params={"uid": "nobody"})

        assert response.status_code == 404
        assert response.json()["detail"] == {"code": "NOT_FOUND", "message": "User not found"}


class TestGetAdmin:
    def test_no_admin_yet(self, client):
        register_user(client, "U1", "u1@gmail.com")

        response = client.get("/api/admin")

        assert response.status_code == 404
        assert response.json()["detail"]["message"] == "Admin not found"

    def test_returns_public_fields(self, client):
        register_user(client, ADMIN_UID, ADMIN_EMAIL, display_name="Support")

        response = client.get("/api/admin")

        assert response.status_code == 200
        assert response.json() == {
            "admin": {"uid": ADMIN_UID, "email": ADMIN_EMAIL, "displayName": "Support"}
        }
