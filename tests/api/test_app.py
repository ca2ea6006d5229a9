"""Tests for application wiring, error handling and the stub endpoints."""

from datetime import UTC, datetime
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from npcdb.api.app import create_app
from npcdb.api.db_operations import DatabaseOperations, EntityKind, clamp_page
from npcdb.api.narrative import build_story, generate_narrative
from npcdb.exceptions import DatabaseError
from npcdb.models import NarrativeRequest


class TestLifespan:
    """Test application startup and shutdown."""

    def test_startup_creates_schema(self, settings):
        """The schema is created on first start."""
        assert not settings.database_path.exists()

        with TestClient(create_app(settings)) as test_client:
            assert test_client.get("/api/health").status_code == 200

        assert settings.database_path.exists()

    def test_db_ops_attached_and_closed(self, settings):
        """The data-access context lives on the app state while running."""
        app = create_app(settings)
        with TestClient(app):
            assert isinstance(app.state.db_ops, DatabaseOperations)
        with pytest.raises(DatabaseError):
            app.state.db_ops._entity(EntityKind.MOVIE)


class TestRouting:
    """Test fallback handlers."""

    def test_health(self, client):
        """Health answers ok."""
        response = client.get("/api/health")
        assert response.json() == {"success": True, "message": "ok"}

    def test_unknown_route(self, client):
        """Unknown routes answer with the not-found envelope."""
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "API not found"}

    def test_unsupported_method(self, client):
        """Unsupported methods on known paths are treated as not found."""
        response = client.patch("/api/movies")
        assert response.status_code == 404

    @pytest.mark.parametrize("action", ["register", "login", "logout"])
    def test_auth_not_implemented(self, client, action):
        """Auth routes are placeholders."""
        response = client.post(f"/api/auth/{action}")

        assert response.status_code == 501
        body = response.json()
        assert body["success"] is False
        assert body["error"] == f"Auth {action} endpoint not implemented yet"

    def test_storage_failure_is_500(self, client):
        """Unexpected storage errors are hidden behind a generic message."""
        with patch.object(
            DatabaseOperations,
            "list_movies",
            side_effect=DatabaseError("disk I/O error"),
        ):
            response = client.get("/api/movies")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Failed to list movies",
        }

    def test_docs_under_prefix(self, client):
        """The OpenAPI document is served under the API prefix."""
        assert client.get("/api/openapi.json").status_code == 200


class TestNarrative:
    """Test the narrative stub."""

    def test_endpoint(self, client):
        """The stub echoes the request and embeds both names."""
        response = client.post(
            "/api/narrative",
            json={"movieTitle": "无间道", "characterName": "陈永仁"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["movieTitle"] == "无间道"
        assert data["characterName"] == "陈永仁"
        assert data["cached"] is False
        assert "陈永仁" in data["story"]
        assert "《无间道》" in data["story"]
        assert data["generatedAt"].endswith("Z")
        datetime.fromisoformat(data["generatedAt"].replace("Z", "+00:00"))

    def test_missing_movie_title(self, client):
        """Both names are required."""
        response = client.post("/api/narrative", json={"characterName": "陈永仁"})

        assert response.status_code == 400
        assert response.json()["error"] == "Movie title is required"

    def test_modifiers_are_emphasized(self):
        """Prompt modifiers add an emphasis paragraph."""
        plain = build_story(
            NarrativeRequest(movie_title="无间道", character_name="陈永仁")
        )
        emphasized = build_story(
            NarrativeRequest(
                movie_title="无间道",
                character_name="陈永仁",
                prompt_modifiers="天台对峙",
            )
        )

        assert "天台对峙" in emphasized
        assert len(emphasized.split("\n\n")) == len(plain.split("\n\n")) + 1

    def test_timestamp(self):
        """The generation time is rendered in UTC with a Z suffix."""
        result = generate_narrative(
            NarrativeRequest(movie_title="m", character_name="c"),
            now=datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
        )
        assert result.generated_at == "2024-05-01T12:00:00Z"


class TestClampPage:
    """Test pagination clamping."""

    @pytest.mark.parametrize(
        ("limit", "offset", "expected"),
        [
            (None, None, (20, 0)),
            ("5", "10", (5, 10)),
            ("500", "0", (100, 0)),
            ("x", "y", (20, 0)),
            ("2.7", "-1", (2, 0)),
        ],
    )
    def test_clamp(self, limit, offset, expected):
        """Limits stay within bounds and offsets are never negative."""
        assert clamp_page(limit, offset, 20, 100) == expected
