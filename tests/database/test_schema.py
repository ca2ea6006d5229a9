"""Tests for schema creation and validation."""

import sqlite3

import pytest

from npcdb.database import (
    SCHEMA_VERSION,
    DatabaseSchema,
    create_database,
    initialize_schema,
)
from npcdb.database.schema import REQUIRED_TABLES

pytestmark = pytest.mark.integration


class TestDatabaseSchema:
    """Test DatabaseSchema."""

    def test_missing_file(self, db_path):
        """A missing file is neither valid nor versioned."""
        schema = DatabaseSchema(db_path)

        assert schema.validate_schema() is False
        assert schema.get_current_version() == 0

    def test_create(self, db_path):
        """All tables exist after creation and the version is recorded."""
        schema = create_database(db_path)

        assert schema.validate_schema() is True
        assert schema.get_current_version() == SCHEMA_VERSION

        conn = sqlite3.connect(db_path)
        try:
            names = {
                row[0]
                for row in conn.execute(
                    "SELECT name FROM sqlite_master WHERE type = 'table'"
                )
            }
        finally:
            conn.close()
        assert set(REQUIRED_TABLES) <= names

    def test_partial_schema_is_invalid(self, db_path):
        """A database missing required tables does not validate."""
        conn = sqlite3.connect(db_path)
        conn.execute("CREATE TABLE movies (id TEXT PRIMARY KEY)")
        conn.commit()
        conn.close()

        assert DatabaseSchema(db_path).validate_schema() is False

    def test_force_recreates(self, db_path):
        """Forcing removes the existing data."""
        create_database(db_path)
        conn = sqlite3.connect(db_path)
        conn.execute("INSERT INTO movies (id, title) VALUES ('m1', 'x')")
        conn.commit()
        conn.close()

        create_database(db_path, force=True)

        conn = sqlite3.connect(db_path)
        try:
            count = conn.execute("SELECT COUNT(*) FROM movies").fetchone()[0]
        finally:
            conn.close()
        assert count == 0

    def test_initialize_is_idempotent(self, db_path):
        """The schema is only created once."""
        assert initialize_schema(db_path) is True
        assert initialize_schema(db_path) is False


class TestConstraints:
    """Test constraints enforced by the schema itself."""

    @pytest.fixture
    def conn(self, db_path):
        create_database(db_path)
        connection = sqlite3.connect(db_path)
        connection.execute("PRAGMA foreign_keys = ON")
        connection.execute("INSERT INTO movies (id, title) VALUES ('m1', 'x')")
        yield connection
        connection.close()

    def test_timestamps_default(self, conn):
        """created_at and updated_at are filled in ISO-8601 UTC."""
        created_at, updated_at = conn.execute(
            "SELECT created_at, updated_at FROM movies WHERE id = 'm1'"
        ).fetchone()

        assert created_at.endswith("Z")
        assert "T" in created_at
        assert updated_at == created_at

    def test_reference_type_check(self, conn):
        """Reference types outside the allowed set are rejected."""
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO movie_references (id, movie_id, type, content) "
                "VALUES ('r1', 'm1', 'gossip', 'x')"
            )

    def test_note_type_check(self, conn):
        """Note types outside the allowed set are rejected."""
        conn.execute(
            "INSERT INTO characters (id, movie_id, name) VALUES ('c1', 'm1', 'n')"
        )
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO character_notes (id, character_id, note_type, content) "
                "VALUES ('n1', 'c1', 'mood', 'x')"
            )

    def test_movie_delete_cascades(self, conn):
        """Everything owned by a movie goes with it."""
        conn.execute(
            "INSERT INTO characters (id, movie_id, name) VALUES ('c1', 'm1', 'n')"
        )
        conn.execute(
            "INSERT INTO character_notes (id, character_id, note_type, content) "
            "VALUES ('n1', 'c1', 'persona', 'x')"
        )
        conn.execute(
            "INSERT INTO scenes (id, movie_id, scene_number) VALUES ('s1', 'm1', 1)"
        )

        conn.execute("DELETE FROM movies WHERE id = 'm1'")

        for table in ("characters", "character_notes", "scenes"):
            count = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
            assert count == 0, table
