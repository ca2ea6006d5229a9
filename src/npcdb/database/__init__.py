"""NPC database persistence layer.

This package provides the SQLite schema, a pooled connection manager and
parameterized data access for every entity table.
"""

from .base import EntityOperations
from .character_ops import CharacterNoteOperations, CharacterOperations
from .connection_manager import ConnectionPool, DatabaseConnectionManager
from .movie_ops import MovieOperations
from .reference_ops import MovieReferenceOperations
from .scene_ops import SceneOperations, SubtitleSegmentOperations
from .schema import (
    SCHEMA_VERSION,
    DatabaseSchema,
    create_database,
    initialize_schema,
)
from .script_ops import MovieDialogueFileOperations, MovieScriptOperations
from .seed import seed_database

__all__ = [
    "SCHEMA_VERSION",
    "CharacterNoteOperations",
    "CharacterOperations",
    "ConnectionPool",
    "DatabaseConnectionManager",
    "DatabaseSchema",
    "EntityOperations",
    "MovieDialogueFileOperations",
    "MovieOperations",
    "MovieReferenceOperations",
    "MovieScriptOperations",
    "SceneOperations",
    "SubtitleSegmentOperations",
    "create_database",
    "initialize_schema",
    "seed_database",
]
