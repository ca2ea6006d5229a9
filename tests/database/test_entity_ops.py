"""Tests for table-level data access."""

import pytest

from npcdb.database import (
    CharacterOperations,
    MovieOperations,
    SceneOperations,
    SubtitleSegmentOperations,
)
from npcdb.database.movie_ops import escape_like
from npcdb.exceptions import ConstraintViolationError, DatabaseError
from npcdb.models import CharacterPayload, MoviePayload

pytestmark = pytest.mark.integration


@pytest.fixture
def movies(manager):
    return MovieOperations(manager)


@pytest.fixture
def movie_id(movies):
    return movies.insert(MovieOperations.to_values(MoviePayload(title="无间道")))


class TestEntityOperations:
    """Test the shared CRUD helpers."""

    def test_insert_and_get(self, movies, movie_id):
        """Inserted rows get a UUID and can be read back."""
        row = movies.get(movie_id)

        assert len(movie_id) == 36
        assert row["title"] == "无间道"
        assert row["genres"] == "[]"

    def test_update_and_delete_counts(self, movies, movie_id):
        """Update and delete report how many rows they touched."""
        values = MovieOperations.to_values(MoviePayload(title="新片名"))

        assert movies.update(movie_id, values) == 1
        assert movies.update("missing", values) == 0
        assert movies.delete(movie_id) == 1
        assert movies.delete(movie_id) == 0
        assert movies.exists(movie_id) is False

    def test_count(self, movies, movie_id):
        """Count covers the whole table."""
        assert movies.count() == 1

    def test_foreign_key_violation(self, manager):
        """Children of a missing movie violate a constraint."""
        characters = CharacterOperations(manager)
        values = CharacterOperations.to_values(
            CharacterPayload(movie_id="missing", name="x")
        )

        with pytest.raises(ConstraintViolationError):
            characters.insert(values)

    def test_list_without_parent(self, movies):
        """Root tables cannot be listed by parent."""
        with pytest.raises(DatabaseError):
            movies.list_for_parent("anything")


class TestCharacterValues:
    """Test character value encoding."""

    def test_json_columns(self, manager, movie_id):
        """Aliases and traits are stored as JSON text with empty defaults."""
        characters = CharacterOperations(manager)
        character_id = characters.insert(
            CharacterOperations.to_values(
                CharacterPayload(movie_id=movie_id, name="陈永仁", is_primary=True)
            )
        )

        row = characters.get(character_id)
        assert row["aliases"] == "[]"
        assert row["traits"] == "{}"
        assert row["is_primary"] == 1


class TestOrdering:
    """Test collection ordering."""

    def test_movies_newest_first(self, movies):
        """Rows created in the same millisecond fall back to insertion order."""
        ids = [
            movies.insert(MovieOperations.to_values(MoviePayload(title=str(i))))
            for i in range(3)
        ]

        rows = movies.list_movies(None, 10, 0)
        assert [row["id"] for row in rows] == list(reversed(ids))

    def test_scenes_by_number(self, manager, movie_id):
        """Scenes list by scene number."""
        scenes = SceneOperations(manager)
        for number in (2, 1):
            scenes.insert({"movie_id": movie_id, "scene_number": number})

        rows = scenes.list_for_parent(movie_id)
        assert [row["scene_number"] for row in rows] == [1, 2]

    def test_subtitle_window(self, manager, movie_id):
        """Subtitle pages follow playback order."""
        subtitles = SubtitleSegmentOperations(manager)
        for start in (300, 100, 200):
            subtitles.insert(
                {"movie_id": movie_id, "start_ms": start, "end_ms": start, "text": "x"}
            )

        rows = subtitles.list_segments(movie_id, 2, 1)
        assert [row["start_ms"] for row in rows] == [200, 300]


class TestEscapeLike:
    """Test LIKE escaping."""

    def test_wildcards(self):
        """Percent, underscore and backslash are escaped."""
        assert escape_like("50%_off\\") == "50\\%\\_off\\\\"
