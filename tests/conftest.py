"""
Shared pytest fixtures for the VideoTube test suite.

Provides:
- An in-memory SQLite database, recreated for every test
- A TestClient with media stored on local disk under tmp_path
- Factories for users (with auth headers) and videos
"""

import os
import tempfile

_workdir = tempfile.mkdtemp(prefix="videotube-tests-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["MEDIA_BACKEND"] = "local"
os.environ["MEDIA_ROOT"] = os.path.join(_workdir, "media")
os.environ["TEMP_UPLOAD_DIR"] = os.path.join(_workdir, "temp")
os.environ["COOKIE_SECURE"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.media_storage import LocalMediaStorage, get_media_storage
from app.db.base import Base, import_models
from app.db.session import SessionLocal, engine
from app.db.models.user import User
from app.db.models.video import Video

API = "/api/v1"


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def fresh_database():
    """Every test starts from empty tables."""
    import_models()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db_session():
    """Session for arranging data and inspecting the store directly."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_db_user(db_session):
    """Insert a user row without going through registration."""
    def _make(username="alice"):
        user = User(
            username=username,
            email=f"{username}@example.com",
            full_name=username.title(),
            avatar_url=f"/media/{username}.png",
            hashed_password="not-a-real-hash",
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make


@pytest.fixture
def make_db_video(db_session):
    """Insert a video row owned by the given user."""
    def _make(owner, title="Video", views=0, is_published=True, duration=60.0):
        video = Video(
            owner_id=owner.id,
            title=title,
            description=f"About {title}",
            video_url=f"/media/{title}.mp4",
            thumbnail_url=f"/media/{title}.png",
            views=views,
            duration=duration,
            is_published=is_published,
        )
        db_session.add(video)
        db_session.commit()
        db_session.refresh(video)
        return video
    return _make


# =============================================================================
# API Fixtures
# =============================================================================

@pytest.fixture
def media_storage(tmp_path):
    return LocalMediaStorage(str(tmp_path / "media"))


@pytest.fixture
def client(media_storage):
    """TestClient with media redirected to a per-test directory."""
    app.dependency_overrides[get_media_storage] = lambda: media_storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def image_file(name="avatar.png"):
    return (name, b"\x89PNG fake image bytes", "image/png")


def video_file(name="clip.mp4"):
    return (name, b"\x00\x00\x00\x18ftypmp42 fake video", "video/mp4")


@pytest.fixture
def register_user(client):
    """Register and log in a user; returns (user_json, auth_headers)."""
    def _register(username="alice", password="secret123"):
        response = client.post(
            f"{API}/users/register",
            data={
                "username": username,
                "email": f"{username}@example.com",
                "full_name": username.title(),
                "password": password,
            },
            files={"avatar": image_file()},
        )
        assert response.status_code == 201, response.text
        login = client.post(f"{API}/users/login", json={"username": username, "password": password})
        assert login.status_code == 200, login.text
        # Authenticate explicitly per request instead of via the shared cookie jar
        client.cookies.clear()
        token = login.json()["data"]["access_token"]
        return response.json()["data"], {"Authorization": f"Bearer {token}"}
    return _register


@pytest.fixture
def upload_video(client):
    """Publish a video through the API; returns the video json."""
    def _upload(headers, title="My video", description="Description"):
        response = client.post(
            f"{API}/videos/",
            data={"title": title, "description": description},
            files={"video_file": video_file(), "thumbnail": image_file("thumb.png")},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]
    return _upload
