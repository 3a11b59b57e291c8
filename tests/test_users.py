"""
Tests for registration, authentication and account endpoints.
"""

import io
from unittest.mock import patch

import pytest
from fastapi import UploadFile

from app.core.exceptions import ConflictError
from app.db.models.user import User
from app.schemas.user import AccountUpdate, UserCreate
from app.services.user_service import user_service
from conftest import API, image_file


class TestRegistration:

    def test_register_returns_user_without_secrets(self, client):
        response = client.post(
            f"{API}/users/register",
            data={"username": "Alice", "email": "alice@example.com", "full_name": "Alice A", "password": "secret123"},
            files={"avatar": image_file(), "cover_image": image_file("cover.png")},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["status_code"] == 201
        user = body["data"]
        assert user["username"] == "alice"
        assert user["avatar_url"].startswith("/media/")
        assert user["cover_image_url"].startswith("/media/")
        assert "hashed_password" not in user
        assert "refresh_token" not in user

    def test_duplicate_username_conflicts(self, client, register_user):
        register_user("alice")

        response = client.post(
            f"{API}/users/register",
            data={"username": "alice", "email": "other@example.com", "full_name": "Other", "password": "secret123"},
            files={"avatar": image_file()},
        )

        assert response.status_code == 409
        assert response.json()["success"] is False

    def test_avatar_is_required(self, client):
        response = client.post(
            f"{API}/users/register",
            data={"username": "alice", "email": "alice@example.com", "full_name": "Alice", "password": "secret123"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Avatar image is required"

    def test_invalid_fields_rejected(self, client):
        response = client.post(
            f"{API}/users/register",
            data={"username": "al", "email": "not-an-email", "full_name": "Alice", "password": "secret123"},
            files={"avatar": image_file()},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["data"] is None
        assert {error["field"] for error in body["errors"]} >= {"username", "email"}


class TestLogin:

    def test_login_by_email(self, client, register_user):
        register_user("alice")

        response = client.post(f"{API}/users/login", json={"email": "alice@example.com", "password": "secret123"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["username"] == "alice"
        assert data["token_type"] == "bearer"
        assert "access_token" in response.cookies

    def test_wrong_password(self, client, register_user):
        register_user("alice")

        response = client.post(f"{API}/users/login", json={"username": "alice", "password": "wrong-pass"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_unknown_user(self, client):
        response = client.post(f"{API}/users/login", json={"username": "ghost", "password": "secret123"})

        assert response.status_code == 404

    def test_username_or_email_required(self, client):
        response = client.post(f"{API}/users/login", json={"password": "secret123"})

        assert response.status_code == 400

    def test_cookie_authenticates_requests(self, client, register_user):
        register_user("alice")
        client.post(f"{API}/users/login", json={"username": "alice", "password": "secret123"})

        response = client.get(f"{API}/users/current-user")

        assert response.status_code == 200
        assert response.json()["data"]["username"] == "alice"


class TestCurrentUser:

    def test_requires_authentication(self, client):
        response = client.get(f"{API}/users/current-user")

        assert response.status_code == 401
        body = response.json()
        assert body == {
            "status_code": 401,
            "message": "Not authenticated",
            "errors": [],
            "data": None,
            "success": False,
        }

    def test_rejects_garbage_token(self, client):
        response = client.get(f"{API}/users/current-user", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid access token"

    def test_returns_caller(self, client, register_user):
        _, headers = register_user("alice")

        response = client.get(f"{API}/users/current-user", headers=headers)

        assert response.json()["data"]["email"] == "alice@example.com"


class TestTokens:

    def _login(self, client):
        response = client.post(f"{API}/users/login", json={"username": "alice", "password": "secret123"})
        client.cookies.clear()
        return response.json()["data"]

    def test_refresh_rotates_tokens(self, client, register_user):
        register_user("alice")
        tokens = self._login(client)

        response = client.post(f"{API}/users/refresh-token", json={"refresh_token": tokens["refresh_token"]})
        client.cookies.clear()

        assert response.status_code == 200
        rotated = response.json()["data"]
        assert rotated["refresh_token"] != tokens["refresh_token"]

        reused = client.post(f"{API}/users/refresh-token", json={"refresh_token": tokens["refresh_token"]})
        assert reused.status_code == 401

    def test_access_token_is_not_a_refresh_token(self, client, register_user):
        register_user("alice")
        tokens = self._login(client)

        response = client.post(f"{API}/users/refresh-token", json={"refresh_token": tokens["access_token"]})

        assert response.status_code == 401

    def test_missing_refresh_token(self, client):
        response = client.post(f"{API}/users/refresh-token")

        assert response.status_code == 401

    def test_logout_invalidates_refresh_token(self, client, register_user):
        register_user("alice")
        tokens = self._login(client)
        headers = {"Authorization": f"Bearer {tokens['access_token']}"}

        assert client.post(f"{API}/users/logout", headers=headers).status_code == 200
        response = client.post(f"{API}/users/refresh-token", json={"refresh_token": tokens["refresh_token"]})

        assert response.status_code == 401


class TestAccount:

    def test_change_password(self, client, register_user):
        _, headers = register_user("alice")

        response = client.post(
            f"{API}/users/change-password",
            json={"old_password": "secret123", "new_password": "newsecret", "confirm_password": "newsecret"},
            headers=headers,
        )

        assert response.status_code == 200
        old = client.post(f"{API}/users/login", json={"username": "alice", "password": "secret123"})
        new = client.post(f"{API}/users/login", json={"username": "alice", "password": "newsecret"})
        assert old.status_code == 401
        assert new.status_code == 200

    def test_change_password_wrong_old(self, client, register_user):
        _, headers = register_user("alice")

        response = client.post(
            f"{API}/users/change-password",
            json={"old_password": "nope", "new_password": "newsecret", "confirm_password": "newsecret"},
            headers=headers,
        )

        assert response.status_code == 401

    def test_update_account(self, client, register_user):
        _, headers = register_user("alice")

        response = client.patch(
            f"{API}/users/update-account",
            json={"full_name": "Alice Liddell", "email": "liddell@example.com"},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["full_name"] == "Alice Liddell"
        assert response.json()["data"]["email"] == "liddell@example.com"

    def test_update_account_email_taken(self, client, register_user):
        _, headers = register_user("alice")
        register_user("bob")

        response = client.patch(
            f"{API}/users/update-account",
            json={"full_name": "Alice", "email": "bob@example.com"},
            headers=headers,
        )

        assert response.status_code == 409

    def test_replace_avatar_removes_old_media(self, client, register_user, media_storage):
        user, headers = register_user("alice")
        old_file = media_storage.root / user["avatar_url"].split("/")[-1]
        assert old_file.exists()

        response = client.patch(f"{API}/users/avatar", files={"avatar": image_file("new.png")}, headers=headers)

        assert response.status_code == 200
        assert response.json()["data"]["avatar_url"] != user["avatar_url"]
        assert not old_file.exists()

    def test_set_cover_image(self, client, register_user):
        _, headers = register_user("alice")

        response = client.patch(f"{API}/users/cover-image", files={"cover_image": image_file("cover.png")}, headers=headers)

        assert response.status_code == 200
        assert response.json()["data"]["cover_image_url"].startswith("/media/")


class TestWatchHistory:

    def test_history_most_recent_first_without_duplicates(self, client, register_user, upload_video):
        _, owner = register_user("alice")
        _, viewer = register_user("bob")
        first = upload_video(owner, title="first")
        second = upload_video(owner, title="second")

        client.get(f"{API}/videos/{first['id']}", headers=viewer)
        client.get(f"{API}/videos/{second['id']}", headers=viewer)
        client.get(f"{API}/videos/{first['id']}", headers=viewer)

        history = client.get(f"{API}/users/history", headers=viewer).json()["data"]
        assert [video["id"] for video in history] == [first["id"], second["id"]]

    def test_anonymous_views_are_not_recorded(self, client, register_user, upload_video):
        _, owner = register_user("alice")
        video = upload_video(owner)

        client.get(f"{API}/videos/{video['id']}")

        history = client.get(f"{API}/users/history", headers=owner).json()["data"]
        assert history == []


class TestUniqueFieldRaces:
    """A row committed between the uniqueness check and the write still yields 409."""

    def test_register_loses_race(self, db_session, make_db_user, media_storage):
        make_db_user("alice")
        user_data = UserCreate(username="alice", email="alice@example.com", full_name="Alice", password="secret123")
        avatar = UploadFile(file=io.BytesIO(b"image"), filename="avatar.png")

        with patch.object(db_session, "scalar", return_value=None):
            with pytest.raises(ConflictError):
                user_service.register_user(db_session, media_storage, user_data, avatar)

        assert list(media_storage.root.iterdir()) == []

    def test_update_account_loses_race(self, db_session, make_db_user):
        alice = make_db_user("alice")
        make_db_user("bob")
        data = AccountUpdate(full_name="Alice", email="bob@example.com")

        with patch.object(user_service, "get_user_by_email", return_value=None):
            with pytest.raises(ConflictError):
                user_service.update_account(db_session, alice, data)

        assert db_session.get(User, alice.id).email == "alice@example.com"
