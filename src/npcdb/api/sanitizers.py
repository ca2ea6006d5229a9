"""Payload sanitizers for untrusted request bodies.

Each sanitizer takes the decoded JSON body of a request (possibly merged with
an existing record for updates) and either returns a fully typed payload or
raises ``ValidationError`` naming the first constraint that failed.
"""

import json
import math
from collections.abc import Mapping
from typing import Any

from npcdb.exceptions import ValidationError
from npcdb.models import (
    CharacterNotePayload,
    CharacterPayload,
    MovieDialogueFilePayload,
    MoviePayload,
    MovieReferencePayload,
    MovieScriptPayload,
    NarrativeRequest,
    NoteType,
    Number,
    ReferenceType,
    ScenePayload,
    SubtitleSegmentPayload,
)

TRAITS_HINT = 'Traits must be valid JSON, e.g. {"temperament": "steadfast"}'

# Legacy snake_case spellings accepted for scene fields
_SCENE_FIELD_ALIASES = {
    "scene_number": "sceneNumber",
    "start_ms": "startMs",
    "end_ms": "endMs",
}


def _require_object(raw: Any) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise ValidationError(
            "Request body must be a JSON object",
            details={"received": type(raw).__name__},
        )
    return raw


def _require_string(body: Mapping[str, Any], key: str, message: str) -> str:
    value = body.get(key)
    if not value or not isinstance(value, str):
        raise ValidationError(message, details={"field": key})
    return value


def _require_trimmed(body: Mapping[str, Any], key: str, message: str) -> str:
    value = _require_string(body, key, message).strip()
    if not value:
        raise ValidationError(message, details={"field": key})
    return value


def _optional_string(value: Any) -> str | None:
    """Keep strings, map everything else (including absence) to None."""
    return value if isinstance(value, str) else None


def _to_number(value: Any) -> Number | None:
    """Convert a number or numeric string; None if it cannot be read as one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) or math.isinf(value) else value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        if math.isnan(number) or math.isinf(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def _optional_number(body: Mapping[str, Any], key: str, message: str) -> Number | None:
    """Read a nullable numeric field; empty string and absence mean None."""
    value = body.get(key)
    if value is None or value == "":
        return None
    number = _to_number(value)
    if number is None:
        raise ValidationError(message, details={"field": key, "value": value})
    return number


def _required_number(body: Mapping[str, Any], key: str, message: str) -> Number:
    value = body.get(key)
    number = None if value is None else _to_number(value)
    if number is None:
        raise ValidationError(message, details={"field": key, "value": value})
    return number


def _string_list(body: Mapping[str, Any], key: str) -> list[str] | None:
    value = body.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValidationError(
            f"{key} must be a list of strings", details={"field": key}
        )
    return [str(item) for item in value]


def _traits(body: Mapping[str, Any]) -> dict[str, Any] | None:
    value = body.get("traits")
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError as e:
            raise ValidationError(TRAITS_HINT, details={"field": "traits"}) from e
    if not isinstance(value, dict):
        raise ValidationError(TRAITS_HINT, details={"field": "traits"})
    return value


def _as_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def normalize_scene_aliases(raw: Any) -> Any:
    """Rename snake_case scene fields to their camelCase spelling.

    A camelCase key already present wins over its snake_case twin.
    """
    if not isinstance(raw, Mapping):
        return raw
    body = dict(raw)
    for legacy, canonical in _SCENE_FIELD_ALIASES.items():
        if legacy in body:
            value = body.pop(legacy)
            body.setdefault(canonical, value)
    return body


def sanitize_movie_payload(raw: Any) -> MoviePayload:
    """Validate a movie body."""
    body = _require_object(raw)
    return MoviePayload(
        title=_require_trimmed(body, "title", "Movie title is required"),
        original_title=_optional_string(body.get("originalTitle")),
        release_year=_optional_number(
            body, "releaseYear", "Release year must be a number"
        ),
        language=_optional_string(body.get("language")),
        runtime_minutes=_optional_number(
            body, "runtimeMinutes", "Runtime minutes must be a number"
        ),
        genres=_string_list(body, "genres"),
        poster_url=_optional_string(body.get("posterUrl")),
        synopsis=_optional_string(body.get("synopsis")),
    )


def sanitize_character_payload(raw: Any) -> CharacterPayload:
    """Validate a character body."""
    body = _require_object(raw)
    return CharacterPayload(
        movie_id=_require_string(body, "movieId", "Movie ID is required"),
        name=_require_trimmed(body, "name", "Character name is required"),
        aliases=_string_list(body, "aliases"),
        actor_name=_optional_string(body.get("actorName")),
        description=_optional_string(body.get("description")),
        traits=_traits(body),
        is_primary=_as_flag(body.get("isPrimary")),
        created_by=_optional_string(body.get("createdBy")),
        updated_by=_optional_string(body.get("updatedBy")),
    )


def sanitize_scene_payload(raw: Any) -> ScenePayload:
    """Validate a scene body, accepting snake_case timing fields."""
    body = normalize_scene_aliases(_require_object(raw))
    movie_id = _require_string(body, "movieId", "Movie ID is required")
    if body.get("sceneNumber") is None:
        raise ValidationError(
            "Scene number is required", details={"field": "sceneNumber"}
        )
    return ScenePayload(
        movie_id=movie_id,
        scene_number=_required_number(
            body, "sceneNumber", "Scene number must be a number"
        ),
        start_ms=_optional_number(
            body, "startMs", "Start time must be a number or left empty"
        ),
        end_ms=_optional_number(
            body, "endMs", "End time must be a number or left empty"
        ),
        summary=_optional_string(body.get("summary")),
        location=_optional_string(body.get("location")),
        chapter=_optional_string(body.get("chapter")),
    )


def sanitize_subtitle_payload(raw: Any) -> SubtitleSegmentPayload:
    """Validate a subtitle segment body.

    ``endMs`` earlier than ``startMs`` is accepted as sent.
    """
    body = _require_object(raw)
    movie_id = _require_string(body, "movieId", "Movie ID is required")
    if body.get("startMs") is None or body.get("endMs") is None:
        raise ValidationError(
            "Start and end times are required",
            details={"fields": ["startMs", "endMs"]},
        )
    start_ms = _required_number(body, "startMs", "Timestamps must be numbers")
    end_ms = _required_number(body, "endMs", "Timestamps must be numbers")
    text = _require_string(body, "text", "Subtitle text is required")
    return SubtitleSegmentPayload(
        movie_id=movie_id,
        scene_id=_optional_string(body.get("sceneId")),
        character_id=_optional_string(body.get("characterId")),
        start_ms=start_ms,
        end_ms=end_ms,
        speaker=_optional_string(body.get("speaker")),
        text=text,
        confidence=_optional_number(body, "confidence", "Confidence must be a number"),
        source=_optional_string(body.get("source")),
    )


def sanitize_reference_payload(raw: Any) -> MovieReferencePayload:
    """Validate a movie reference body."""
    body = _require_object(raw)
    movie_id = _require_string(body, "movieId", "Movie ID is required")
    ref_type = _require_string(body, "type", "Reference type is required")
    content = _require_string(body, "content", "Reference content is required")
    try:
        reference_type = ReferenceType(ref_type)
    except ValueError as e:
        raise ValidationError(
            f"Unknown reference type: {ref_type}",
            details={"allowed": [t.value for t in ReferenceType]},
        ) from e
    return MovieReferencePayload(
        movie_id=movie_id,
        type=reference_type,
        title=_optional_string(body.get("title")),
        content=content,
        source_url=_optional_string(body.get("sourceUrl")),
        created_by=_optional_string(body.get("createdBy")),
    )


def sanitize_character_note_payload(raw: Any) -> CharacterNotePayload:
    """Validate a character note body."""
    body = _require_object(raw)
    character_id = _require_string(body, "characterId", "Character ID is required")
    note_type = _require_string(body, "noteType", "Note type is required")
    content = _require_string(body, "content", "Note content is required")
    try:
        parsed_type = NoteType(note_type)
    except ValueError as e:
        raise ValidationError(
            f"Unknown note type: {note_type}",
            details={"allowed": [t.value for t in NoteType]},
        ) from e
    return CharacterNotePayload(
        character_id=character_id,
        note_type=parsed_type,
        content=content,
        source=_optional_string(body.get("source")),
        created_by=_optional_string(body.get("createdBy")),
    )


def sanitize_movie_script_payload(raw: Any) -> MovieScriptPayload:
    """Validate a movie script body."""
    body = _require_object(raw)
    return MovieScriptPayload(
        movie_id=_require_string(body, "movieId", "Movie ID is required"),
        script_title=_optional_string(body.get("scriptTitle")),
        plot_text=_optional_string(body.get("plotText")),
        screenplay_text=_require_string(
            body, "screenplayText", "Screenplay text is required"
        ),
        created_by=_optional_string(body.get("createdBy")),
    )


def sanitize_movie_dialogue_payload(raw: Any) -> MovieDialogueFilePayload:
    """Validate a dialogue file body."""
    body = _require_object(raw)
    return MovieDialogueFilePayload(
        movie_id=_require_string(body, "movieId", "Movie ID is required"),
        file_name=_optional_string(body.get("fileName")),
        dialogue_text=_require_string(
            body, "dialogueText", "Dialogue text is required"
        ),
        total_lines=_optional_number(
            body, "totalLines", "Total lines must be a number"
        ),
        created_by=_optional_string(body.get("createdBy")),
    )


def sanitize_narrative_payload(raw: Any) -> NarrativeRequest:
    """Validate a narrative request body."""
    body = _require_object(raw)
    modifiers = body.get("promptModifiers")
    return NarrativeRequest(
        movie_title=_require_trimmed(body, "movieTitle", "Movie title is required"),
        character_name=_require_trimmed(
            body, "characterName", "Character name is required"
        ),
        prompt_modifiers=str(modifiers) if modifiers else None,
    )
