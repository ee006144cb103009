"""
Shared fixtures: an in-memory store, an app wired to it, and a client.
"""

import pytest
from fastapi.testclient import TestClient

from config.settings import config
from database.store import InMemoryStore
from main import create_app


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(config, "bcrypt_rounds", 4)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def client(store):
    with TestClient(create_app(store)) as c:
        yield c


@pytest.fixture
def signup(client):
    """Register a user and return its bearer header."""

    def _signup(email="alice@example.com", password="s3cret-pass"):
        resp = client.post("/register", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _signup
