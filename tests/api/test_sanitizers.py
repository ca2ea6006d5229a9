"""Tests for request payload sanitizers."""

import pytest

from npcdb.api.sanitizers import (
    TRAITS_HINT,
    normalize_scene_aliases,
    sanitize_character_note_payload,
    sanitize_character_payload,
    sanitize_movie_dialogue_payload,
    sanitize_movie_payload,
    sanitize_movie_script_payload,
    sanitize_narrative_payload,
    sanitize_reference_payload,
    sanitize_scene_payload,
    sanitize_subtitle_payload,
)
from npcdb.exceptions import ValidationError

pytestmark = pytest.mark.unit


class TestMoviePayload:
    """Test movie body validation."""

    def test_minimal(self):
        """Only the title is required."""
        payload = sanitize_movie_payload({"title": "  霸王别姬  "})

        assert payload.title == "霸王别姬"
        assert payload.genres is None
        assert payload.release_year is None

    @pytest.mark.parametrize("body", [{}, {"title": ""}, {"title": "   "}, {"title": 7}])
    def test_title_required(self, body):
        """A missing or blank title is rejected."""
        with pytest.raises(ValidationError, match="Movie title is required"):
            sanitize_movie_payload(body)

    def test_empty_year_means_absent(self):
        """An empty string for a numeric field is treated as not provided."""
        payload = sanitize_movie_payload({"title": "x", "releaseYear": ""})
        assert payload.release_year is None

    def test_numeric_string_year(self):
        """Numeric strings are accepted."""
        payload = sanitize_movie_payload({"title": "x", "releaseYear": "2002"})
        assert payload.release_year == 2002

    def test_bad_year(self):
        """Non-numeric years are rejected."""
        with pytest.raises(ValidationError, match="Release year must be a number"):
            sanitize_movie_payload({"title": "x", "releaseYear": "soon"})

    def test_genres_must_be_list(self):
        """Genres sent as a string are rejected."""
        with pytest.raises(ValidationError, match="genres must be a list"):
            sanitize_movie_payload({"title": "x", "genres": "drama"})

    def test_non_object_body(self):
        """Arrays and scalars are not valid bodies."""
        with pytest.raises(ValidationError, match="JSON object"):
            sanitize_movie_payload(["title"])


class TestCharacterPayload:
    """Test character body validation."""

    def test_traits_as_object(self):
        """A traits mapping is kept as is."""
        payload = sanitize_character_payload(
            {"movieId": "m1", "name": "陈永仁", "traits": {"身份": "卧底"}}
        )
        assert payload.traits == {"身份": "卧底"}
        assert payload.is_primary is False

    def test_traits_as_json_text(self):
        """Traits typed into a textarea arrive as JSON text."""
        payload = sanitize_character_payload(
            {"movieId": "m1", "name": "x", "traits": '{"mood": "calm"}'}
        )
        assert payload.traits == {"mood": "calm"}

    @pytest.mark.parametrize("traits", ["{not json", "[1, 2]", 5])
    def test_malformed_traits(self, traits):
        """Traits that are not a JSON object fail with the fixed hint."""
        with pytest.raises(ValidationError) as exc_info:
            sanitize_character_payload({"movieId": "m1", "name": "x", "traits": traits})
        assert exc_info.value.message == TRAITS_HINT

    def test_requires_movie_and_name(self):
        """Movie id and name are both required."""
        with pytest.raises(ValidationError, match="Movie ID is required"):
            sanitize_character_payload({"name": "x"})
        with pytest.raises(ValidationError, match="Character name is required"):
            sanitize_character_payload({"movieId": "m1", "name": " "})

    def test_primary_flag(self):
        """Truthy flags are normalized to a boolean."""
        payload = sanitize_character_payload(
            {"movieId": "m1", "name": "x", "isPrimary": "true"}
        )
        assert payload.is_primary is True


class TestScenePayload:
    """Test scene body validation."""

    def test_snake_case_aliases(self):
        """Legacy snake_case timing fields are accepted."""
        payload = sanitize_scene_payload(
            {"movieId": "m1", "scene_number": 3, "start_ms": 0, "end_ms": 9000}
        )

        assert payload.scene_number == 3
        assert payload.start_ms == 0
        assert payload.end_ms == 9000

    def test_camel_case_wins(self):
        """The camelCase key takes precedence over its snake_case twin."""
        body = normalize_scene_aliases({"sceneNumber": 2, "scene_number": 9})
        assert body == {"sceneNumber": 2}

    def test_scene_number_required(self):
        """A scene without a number is rejected."""
        with pytest.raises(ValidationError, match="Scene number is required"):
            sanitize_scene_payload({"movieId": "m1"})

    @pytest.mark.parametrize("value", ["", "first"])
    def test_scene_number_numeric(self, value):
        """Blank or non-numeric scene numbers are rejected."""
        with pytest.raises(ValidationError, match="Scene number must be a number"):
            sanitize_scene_payload({"movieId": "m1", "sceneNumber": value})

    def test_blank_timing_is_absent(self):
        """Empty timing fields are stored as missing."""
        payload = sanitize_scene_payload(
            {"movieId": "m1", "sceneNumber": "1", "startMs": "", "endMs": None}
        )
        assert payload.start_ms is None
        assert payload.end_ms is None


class TestSubtitlePayload:
    """Test subtitle body validation."""

    def test_end_before_start_is_accepted(self):
        """Timing order is not enforced."""
        payload = sanitize_subtitle_payload(
            {"movieId": "m1", "startMs": 5000, "endMs": 1000, "text": "..."}
        )
        assert payload.start_ms == 5000
        assert payload.end_ms == 1000

    def test_times_required(self):
        """Both timestamps must be present."""
        with pytest.raises(ValidationError, match="Start and end times are required"):
            sanitize_subtitle_payload({"movieId": "m1", "startMs": 0, "text": "x"})

    def test_times_numeric(self):
        """Timestamps must be numbers."""
        with pytest.raises(ValidationError, match="Timestamps must be numbers"):
            sanitize_subtitle_payload(
                {"movieId": "m1", "startMs": "a", "endMs": 1, "text": "x"}
            )

    def test_text_required(self):
        """Subtitle text is required."""
        with pytest.raises(ValidationError, match="Subtitle text is required"):
            sanitize_subtitle_payload({"movieId": "m1", "startMs": 0, "endMs": 1})


class TestEnumeratedTypes:
    """Test reference and note type checks."""

    def test_reference_type(self):
        """Known reference types pass."""
        payload = sanitize_reference_payload(
            {"movieId": "m1", "type": "trivia", "content": "fact"}
        )
        assert payload.type == "trivia"

    def test_unknown_reference_type(self):
        """Unknown reference types are rejected with the allowed values."""
        with pytest.raises(ValidationError, match="Unknown reference type: gossip") as e:
            sanitize_reference_payload(
                {"movieId": "m1", "type": "gossip", "content": "x"}
            )
        assert "plot_point" in e.value.details["allowed"]

    def test_unknown_note_type(self):
        """Unknown note types are rejected."""
        with pytest.raises(ValidationError, match="Unknown note type: mood"):
            sanitize_character_note_payload(
                {"characterId": "c1", "noteType": "mood", "content": "x"}
            )

    def test_note(self):
        """A complete note passes."""
        payload = sanitize_character_note_payload(
            {"characterId": "c1", "noteType": "speech_pattern", "content": "寡言"}
        )
        assert payload.note_type == "speech_pattern"


class TestTextPayloads:
    """Test script, dialogue and narrative bodies."""

    def test_script_requires_screenplay(self):
        """Screenplay text is required."""
        with pytest.raises(ValidationError, match="Screenplay text is required"):
            sanitize_movie_script_payload({"movieId": "m1", "scriptTitle": "t"})

    def test_dialogue_total_lines(self):
        """Total lines may be sent as text."""
        payload = sanitize_movie_dialogue_payload(
            {"movieId": "m1", "dialogueText": "a\nb", "totalLines": "2"}
        )
        assert payload.total_lines == 2

    def test_narrative_trims(self):
        """Narrative fields are trimmed and modifiers are optional."""
        request = sanitize_narrative_payload(
            {"movieTitle": " 无间道 ", "characterName": "陈永仁 "}
        )
        assert request.movie_title == "无间道"
        assert request.character_name == "陈永仁"
        assert request.prompt_modifiers is None

    def test_narrative_requires_character(self):
        """The character name is required."""
        with pytest.raises(ValidationError, match="Character name is required"):
            sanitize_narrative_payload({"movieTitle": "无间道"})
