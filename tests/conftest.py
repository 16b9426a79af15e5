# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from vault.config import settings
from vault.db.memory import MemoryStorage
from vault.db.session import get_storage
from vault.db.sql_storage import SqlStorage
from vault.main import app
from vault.schemas.category import CategoryCreate
from vault.schemas.playlist import PlaylistCreate
from vault.schemas.track import TrackCreate
from vault.schemas.user import UserCreate


def _sql_storage():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    sql = SqlStorage(engine)
    sql.create_tables()
    return sql


@pytest.fixture(params=["memory", "sql"])
def any_store(request):
    """Each backend in turn, for tests of the shared storage contract."""
    if request.param == "memory":
        return MemoryStorage()
    return _sql_storage()


@pytest.fixture
def store():
    return MemoryStorage()


@pytest.fixture
def owner(store):
    return store.create_user(UserCreate(username="owner", password="secret", full_name="Owner"))


@pytest.fixture
def stranger(store):
    return store.create_user(UserCreate(username="stranger", password="hunter2"))


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(path))
    return path


@pytest.fixture
def client(store, owner, upload_dir, monkeypatch):
    """API client acting as `owner` against the test store."""
    monkeypatch.setattr(settings, "DEMO_USER_ID", owner.id)
    app.dependency_overrides[get_storage] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def lenient_client(client):
    """Same setup as `client`, but unhandled errors come back as 500 responses."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def make_track(store, upload_dir):
    """
    Usage:
      make_track(user, name="Memo", duration=42, category_id=None)
    Writes a small audio file under the upload dir and registers a track for it.
    """
    def _make(user, name="Memo", duration=42, category_id=None, payload=b"\x1aE\xdf\xa3webm"):
        upload_dir.mkdir(parents=True, exist_ok=True)
        path = upload_dir / f"{name.replace(' ', '_')}-{len(store.tracks)}.webm"
        path.write_bytes(payload)
        return store.create_track(
            user.id,
            TrackCreate(name=name, duration=duration, category_id=category_id),
            str(path),
        )
    return _make


@pytest.fixture
def make_category(store):
    def _make(user, name="Interviews"):
        return store.create_category(user.id, CategoryCreate(name=name, icon="ri-mic-fill", color="#1DB954"))
    return _make


@pytest.fixture
def make_playlist(store):
    def _make(user, name="Demo"):
        return store.create_playlist(user.id, PlaylistCreate(name=name, icon="ri-music-fill", color="#2D46B9"))
    return _make
