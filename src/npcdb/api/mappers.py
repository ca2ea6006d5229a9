"""Row mappers from persisted records to API entities.

Every mapper is total: missing columns, malformed JSON text and
non-numeric values degrade to empty containers or None instead of raising.
"""

import json
import math
from collections.abc import Mapping
from typing import Any

from npcdb.models import (
    Character,
    CharacterNote,
    Movie,
    MovieDialogueFile,
    MovieReference,
    MovieScript,
    Number,
    Scene,
    SubtitleSegment,
)

Row = Mapping[str, Any]


def _as_dict(row: Row) -> dict[str, Any]:
    return {key: row[key] for key in row.keys()}  # noqa: SIM118


def parse_json_list(value: Any) -> list[str]:
    """Decode a JSON array column, falling back to an empty list."""
    if value is None:
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return []
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def parse_json_object(value: Any) -> dict[str, Any]:
    """Decode a JSON object column, falling back to an empty mapping."""
    if value is None:
        return {}
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return {}
    if not isinstance(value, dict):
        return {}
    return value


def as_string(value: Any) -> str | None:
    """Return the value as text, keeping None as None."""
    if value is None:
        return None
    return str(value)


def as_number(value: Any) -> Number | None:
    """Return the value as a number, or None when it cannot be read as one."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) or math.isinf(value) else value
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return int(number) if number.is_integer() else number


def as_bool(value: Any) -> bool:
    """Normalize 0/1 storage (or text) to a boolean."""
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def map_movie(row: Row) -> Movie:
    """Map a ``movies`` row."""
    data = _as_dict(row)
    return Movie(
        id=_text(data.get("id")),
        title=_text(data.get("title")),
        original_title=as_string(data.get("original_title")),
        release_year=as_number(data.get("release_year")),
        language=as_string(data.get("language")),
        runtime_minutes=as_number(data.get("runtime_minutes")),
        genres=parse_json_list(data.get("genres")),
        poster_url=as_string(data.get("poster_url")),
        synopsis=as_string(data.get("synopsis")),
        created_at=_text(data.get("created_at")),
        updated_at=_text(data.get("updated_at")),
    )


def map_character(row: Row) -> Character:
    """Map a ``characters`` row."""
    data = _as_dict(row)
    return Character(
        id=_text(data.get("id")),
        movie_id=_text(data.get("movie_id")),
        name=_text(data.get("name")),
        aliases=parse_json_list(data.get("aliases")),
        actor_name=as_string(data.get("actor_name")),
        description=as_string(data.get("description")),
        traits=parse_json_object(data.get("traits")),
        is_primary=as_bool(data.get("is_primary")),
        created_at=_text(data.get("created_at")),
        updated_at=_text(data.get("updated_at")),
        created_by=as_string(data.get("created_by")),
        updated_by=as_string(data.get("updated_by")),
    )


def map_scene(row: Row) -> Scene:
    """Map a ``scenes`` row."""
    data = _as_dict(row)
    return Scene(
        id=_text(data.get("id")),
        movie_id=_text(data.get("movie_id")),
        scene_number=as_number(data.get("scene_number")) or 0,
        start_ms=as_number(data.get("start_ms")),
        end_ms=as_number(data.get("end_ms")),
        summary=as_string(data.get("summary")),
        location=as_string(data.get("location")),
        chapter=as_string(data.get("chapter")),
        created_at=_text(data.get("created_at")),
        updated_at=_text(data.get("updated_at")),
    )


def map_subtitle_segment(row: Row) -> SubtitleSegment:
    """Map a ``subtitle_segments`` row."""
    data = _as_dict(row)
    return SubtitleSegment(
        id=_text(data.get("id")),
        movie_id=_text(data.get("movie_id")),
        scene_id=as_string(data.get("scene_id")),
        character_id=as_string(data.get("character_id")),
        start_ms=as_number(data.get("start_ms")) or 0,
        end_ms=as_number(data.get("end_ms")) or 0,
        speaker=as_string(data.get("speaker")),
        text=_text(data.get("text")),
        confidence=as_number(data.get("confidence")),
        source=as_string(data.get("source")),
        created_at=_text(data.get("created_at")),
    )


def map_movie_reference(row: Row) -> MovieReference:
    """Map a ``movie_references`` row."""
    data = _as_dict(row)
    return MovieReference(
        id=_text(data.get("id")),
        movie_id=_text(data.get("movie_id")),
        type=_text(data.get("type")),
        title=as_string(data.get("title")),
        content=_text(data.get("content")),
        source_url=as_string(data.get("source_url")),
        created_at=_text(data.get("created_at")),
        created_by=as_string(data.get("created_by")),
    )


def map_character_note(row: Row) -> CharacterNote:
    """Map a ``character_notes`` row."""
    data = _as_dict(row)
    return CharacterNote(
        id=_text(data.get("id")),
        character_id=_text(data.get("character_id")),
        note_type=_text(data.get("note_type")),
        content=_text(data.get("content")),
        source=as_string(data.get("source")),
        created_by=as_string(data.get("created_by")),
        created_at=_text(data.get("created_at")),
    )


def map_movie_script(row: Row) -> MovieScript:
    """Map a ``movie_scripts`` row."""
    data = _as_dict(row)
    return MovieScript(
        id=_text(data.get("id")),
        movie_id=_text(data.get("movie_id")),
        script_title=as_string(data.get("script_title")),
        plot_text=as_string(data.get("plot_text")),
        screenplay_text=_text(data.get("screenplay_text")),
        created_by=as_string(data.get("created_by")),
        created_at=_text(data.get("created_at")),
        updated_at=_text(data.get("updated_at")),
    )


def map_movie_dialogue_file(row: Row) -> MovieDialogueFile:
    """Map a ``movie_dialogue_files`` row."""
    data = _as_dict(row)
    return MovieDialogueFile(
        id=_text(data.get("id")),
        movie_id=_text(data.get("movie_id")),
        file_name=as_string(data.get("file_name")),
        dialogue_text=_text(data.get("dialogue_text")),
        total_lines=as_number(data.get("total_lines")),
        created_by=as_string(data.get("created_by")),
        created_at=_text(data.get("created_at")),
        updated_at=_text(data.get("updated_at")),
    )
