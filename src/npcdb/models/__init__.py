"""NPC database models.

Entities are what the API returns: every record carries its server-assigned
id and timestamps. Payloads are what the sanitizers produce from untrusted
request bodies, ready to be written to the store. Both serialize with
camelCase keys on the wire.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Number = int | float


class ReferenceType(str, Enum):
    """Kinds of reference material attached to a movie."""

    PLOT_POINT = "plot_point"
    BACKGROUND = "background"
    TRIVIA = "trivia"
    MARKETING = "marketing"


class NoteType(str, Enum):
    """Kinds of notes attached to a character."""

    PERSONA = "persona"
    RELATIONSHIP = "relationship"
    BACKSTORY = "backstory"
    SPEECH_PATTERN = "speech_pattern"
    OTHER = "other"


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


# Entities


class Movie(CamelModel):
    """A movie, the root every other record hangs off."""

    id: str
    title: str
    original_title: str | None = None
    release_year: Number | None = None
    language: str | None = None
    runtime_minutes: Number | None = None
    genres: list[str] = Field(default_factory=list)
    poster_url: str | None = None
    synopsis: str | None = None
    created_at: str = ""
    updated_at: str = ""


class Character(CamelModel):
    """A character appearing in a movie."""

    id: str
    movie_id: str
    name: str
    aliases: list[str] = Field(default_factory=list)
    actor_name: str | None = None
    description: str | None = None
    traits: dict[str, Any] = Field(default_factory=dict)
    is_primary: bool = False
    created_at: str = ""
    updated_at: str = ""
    created_by: str | None = None
    updated_by: str | None = None


class Scene(CamelModel):
    """A numbered scene of a movie with optional timing."""

    id: str
    movie_id: str
    scene_number: Number
    start_ms: Number | None = None
    end_ms: Number | None = None
    summary: str | None = None
    location: str | None = None
    chapter: str | None = None
    created_at: str = ""
    updated_at: str = ""


class SubtitleSegment(CamelModel):
    """A timed subtitle line."""

    id: str
    movie_id: str
    scene_id: str | None = None
    character_id: str | None = None
    start_ms: Number
    end_ms: Number
    speaker: str | None = None
    text: str
    confidence: Number | None = None
    source: str | None = None
    created_at: str = ""


class MovieReference(CamelModel):
    """Reference material about a movie."""

    id: str
    movie_id: str
    type: str
    title: str | None = None
    content: str
    source_url: str | None = None
    created_at: str = ""
    created_by: str | None = None


class CharacterNote(CamelModel):
    """A free-form note about a character."""

    id: str
    character_id: str
    note_type: str
    content: str
    source: str | None = None
    created_by: str | None = None
    created_at: str = ""


class MovieScript(CamelModel):
    """Screenplay text stored for a movie."""

    id: str
    movie_id: str
    script_title: str | None = None
    plot_text: str | None = None
    screenplay_text: str
    created_by: str | None = None
    created_at: str = ""
    updated_at: str = ""


class MovieDialogueFile(CamelModel):
    """An uploaded dialogue transcript for a movie."""

    id: str
    movie_id: str
    file_name: str | None = None
    dialogue_text: str
    total_lines: Number | None = None
    created_by: str | None = None
    created_at: str = ""
    updated_at: str = ""


# Payloads

# List and mapping fields are None when the caller did not send them; the
# store substitutes an empty container on write.


class MoviePayload(CamelModel):
    """Validated movie input."""

    title: str
    original_title: str | None = None
    release_year: Number | None = None
    language: str | None = None
    runtime_minutes: Number | None = None
    genres: list[str] | None = None
    poster_url: str | None = None
    synopsis: str | None = None


class CharacterPayload(CamelModel):
    """Validated character input."""

    movie_id: str
    name: str
    aliases: list[str] | None = None
    actor_name: str | None = None
    description: str | None = None
    traits: dict[str, Any] | None = None
    is_primary: bool = False
    created_by: str | None = None
    updated_by: str | None = None


class ScenePayload(CamelModel):
    """Validated scene input."""

    movie_id: str
    scene_number: Number
    start_ms: Number | None = None
    end_ms: Number | None = None
    summary: str | None = None
    location: str | None = None
    chapter: str | None = None


class SubtitleSegmentPayload(CamelModel):
    """Validated subtitle segment input."""

    movie_id: str
    scene_id: str | None = None
    character_id: str | None = None
    start_ms: Number
    end_ms: Number
    speaker: str | None = None
    text: str
    confidence: Number | None = None
    source: str | None = None


class MovieReferencePayload(CamelModel):
    """Validated movie reference input."""

    movie_id: str
    type: ReferenceType
    title: str | None = None
    content: str
    source_url: str | None = None
    created_by: str | None = None


class CharacterNotePayload(CamelModel):
    """Validated character note input."""

    character_id: str
    note_type: NoteType
    content: str
    source: str | None = None
    created_by: str | None = None


class MovieScriptPayload(CamelModel):
    """Validated movie script input."""

    movie_id: str
    script_title: str | None = None
    plot_text: str | None = None
    screenplay_text: str
    created_by: str | None = None


class MovieDialogueFilePayload(CamelModel):
    """Validated dialogue file input."""

    movie_id: str
    file_name: str | None = None
    dialogue_text: str
    total_lines: Number | None = None
    created_by: str | None = None


class NarrativeRequest(CamelModel):
    """Validated narrative stub input."""

    movie_title: str
    character_name: str
    prompt_modifiers: str | None = None


class NarrativeResult(CamelModel):
    """Narrative stub output."""

    story: str
    movie_title: str
    character_name: str
    cached: bool = False
    generated_at: str


class Pagination(CamelModel):
    """Pagination block of a paginated collection."""

    limit: int
    offset: int
    count: int


class Page(CamelModel):
    """A page of items with its pagination block."""

    items: list[Any]
    pagination: Pagination
