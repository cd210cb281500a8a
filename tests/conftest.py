"""Shared fixtures: the app wired to an in-memory Motor fake.

The lifespan is never entered (TestClient is not used as a context manager),
so no real MongoDB connection is attempted.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from songbook.core import database
from songbook.main import app
from tests.fakes import FakeMongoClient


@pytest.fixture
def mongo_client(monkeypatch):
    client = FakeMongoClient()
    monkeypatch.setattr(database.db, "client", client)
    monkeypatch.setattr(database.db, "db", client["songbook_test"])
    asyncio.run(database.create_indexes())
    return client


@pytest.fixture
def mongo(mongo_client):
    return mongo_client["songbook_test"]


@pytest.fixture
def client(mongo):
    return TestClient(app)


@pytest.fixture
def make_song(client):
    """POST a song and return its JSON representation."""

    def _make(title, artist="Choir", **extra):
        response = client.post("/api/song", json={"title": title, "artist": artist, **extra})
        assert response.status_code == 201, response.text
        return response.json()["song"]

    return _make


@pytest.fixture
def make_tutorial(client):
    """POST a tutorial onto a song and return its JSON representation."""

    def _make(song_id, title, **extra):
        payload = {"type": "video", "title": title, "googleId": f"gid-{title}", **extra}
        response = client.post(f"/api/song/{song_id}", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["tutorial"]

    return _make
