"""
Global pytest fixtures for the User Directory test suite.

Responsibilities:
    - Provide a fresh FastAPI TestClient via the app factory for integration tests
    - Provide isolated in-memory Storage, DirectoryStore and SessionAuthority fixtures
    - Provide a JSON file backend rooted in pytest's tmp_path

Why an app factory?
    Using `create_app()` ensures each test gets its own store and session
    table, eliminating cross-test flakiness.
"""

import os

# Importing main builds the module-level app; keep it off the real data file.
os.environ.setdefault("USERDIR_STORAGE_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient

from auth.config import TOKEN_HEADER
from main import create_app
from user_directory.directory.store import DirectoryStore
from user_directory.models import UserFields
from user_directory.sessions.authority import SessionAuthority
from user_directory.storage.json_storage import JSONFileStorage
from user_directory.storage.storage import Storage


@pytest.fixture
def storage() -> Storage:
    """Fresh in-memory storage backend."""
    return Storage()


@pytest.fixture
def json_storage(tmp_path) -> JSONFileStorage:
    """JSON file backend writing under the test's tmp_path."""
    return JSONFileStorage(tmp_path / "users.json")


@pytest.fixture
def store(storage: Storage) -> DirectoryStore:
    """DirectoryStore wired to the in-memory storage fixture."""
    return DirectoryStore.from_storage(storage)


@pytest.fixture
def authority() -> SessionAuthority:
    return SessionAuthority()


@pytest.fixture
def client(storage: Storage) -> TestClient:
    """
    Provide a fresh TestClient with a new app instance.

    The app shares the `storage` fixture, so tests can inspect what was
    persisted or make saves fail.
    """
    app = create_app(storage=storage)
    return TestClient(app)


@pytest.fixture
def login(client: TestClient):
    """Return a helper that logs `username` in and gives back auth headers."""
    def _login(username: str) -> dict:
        resp = client.post("/login", json={"username": username})
        assert resp.status_code == 200
        return {TOKEN_HEADER: resp.json()["token"]}
    return _login


@pytest.fixture
def make_fields():
    """Return a helper building create payloads from a bare username."""
    def _make(name: str) -> UserFields:
        return UserFields(username=name, real_name=name.title(), email=f"{name}@example.com")
    return _make
