"""Character and character note data access."""

import json
from typing import Any

from npcdb.models import CharacterNotePayload, CharacterPayload

from .base import EntityOperations


class CharacterOperations(EntityOperations):
    """Operations on the ``characters`` table."""

    table = "characters"
    parent_column = "movie_id"
    columns = (
        "movie_id",
        "name",
        "aliases",
        "actor_name",
        "description",
        "traits",
        "is_primary",
        "created_by",
        "updated_by",
    )

    @staticmethod
    def to_values(payload: CharacterPayload) -> dict[str, Any]:
        """Column values for a validated payload."""
        return {
            "movie_id": payload.movie_id,
            "name": payload.name,
            "aliases": json.dumps(payload.aliases or [], ensure_ascii=False),
            "actor_name": payload.actor_name,
            "description": payload.description,
            "traits": json.dumps(payload.traits or {}, ensure_ascii=False),
            "is_primary": 1 if payload.is_primary else 0,
            "created_by": payload.created_by,
            "updated_by": payload.updated_by,
        }


class CharacterNoteOperations(EntityOperations):
    """Operations on the ``character_notes`` table."""

    table = "character_notes"
    parent_column = "character_id"
    columns = ("character_id", "note_type", "content", "source", "created_by")

    @staticmethod
    def to_values(payload: CharacterNotePayload) -> dict[str, Any]:
        """Column values for a validated payload."""
        return {
            "character_id": payload.character_id,
            "note_type": payload.note_type,
            "content": payload.content,
            "source": payload.source,
            "created_by": payload.created_by,
        }
