"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient

from npcdb.api.app import create_app
from npcdb.config import NpcDBSettings, reset_settings, set_settings
from npcdb.database import DatabaseConnectionManager, initialize_schema


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: fast tests without I/O")
    config.addinivalue_line(
        "markers", "integration: tests that touch a real SQLite database"
    )


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the developer's environment and database."""
    for key in list(os.environ):
        if key.startswith("NPCDB_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("NPCDB_DATABASE_PATH", str(tmp_path / "npcdb.db"))
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def db_path(tmp_path):
    """Path of the per-test database file."""
    return tmp_path / "npcdb.db"


@pytest.fixture
def settings(db_path):
    """Settings pointing at the per-test database, installed globally."""
    test_settings = NpcDBSettings(database_path=db_path)
    set_settings(test_settings)
    return test_settings


@pytest.fixture
def manager(settings):
    """Connection manager over an initialized schema."""
    initialize_schema(settings.database_path)
    db_manager = DatabaseConnectionManager(settings)
    yield db_manager
    db_manager.close()


@pytest.fixture
def client(settings):
    """Test client with the application lifespan running."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def movie(client):
    """A stored movie, as returned by the API."""
    response = client.post(
        "/api/movies",
        json={
            "title": "无间道",
            "originalTitle": "Infernal Affairs",
            "releaseYear": 2002,
            "genres": ["犯罪", "惊悚"],
        },
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def character(client, movie):
    """A stored character of ``movie``."""
    response = client.post(
        f"/api/movies/{movie['id']}/characters",
        json={
            "name": "陈永仁",
            "actorName": "梁朝伟",
            "aliases": ["阿仁"],
            "traits": {"身份": "卧底"},
        },
    )
    assert response.status_code == 201
    return response.json()["data"]
