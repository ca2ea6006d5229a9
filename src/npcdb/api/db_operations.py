"""Database operations module for the NPC database API.

``DatabaseOperations`` is the data-access context handed to every route. It
is created once per application, opened in the lifespan hook and closed at
shutdown. Blocking sqlite calls run in a worker thread so each call is an
independent awaitable.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel

from npcdb.api import mappers
from npcdb.config import NpcDBSettings, get_logger, get_settings
from npcdb.database import (
    CharacterNoteOperations,
    CharacterOperations,
    DatabaseConnectionManager,
    EntityOperations,
    MovieDialogueFileOperations,
    MovieOperations,
    MovieReferenceOperations,
    MovieScriptOperations,
    SceneOperations,
    SubtitleSegmentOperations,
    initialize_schema,
)
from npcdb.database.movie_ops import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from npcdb.database.scene_ops import (
    DEFAULT_SUBTITLE_PAGE_SIZE,
    MAX_SUBTITLE_PAGE_SIZE,
)
from npcdb.exceptions import DatabaseError
from npcdb.models import Movie, Page, Pagination, SubtitleSegment

logger = get_logger(__name__)


class EntityKind(str, Enum):
    """Entity tables reachable through the API."""

    MOVIE = "movie"
    CHARACTER = "character"
    SCENE = "scene"
    SUBTITLE_SEGMENT = "subtitle_segment"
    REFERENCE = "reference"
    CHARACTER_NOTE = "character_note"
    MOVIE_SCRIPT = "movie_script"
    MOVIE_DIALOGUE = "movie_dialogue"


@dataclass(frozen=True)
class _EntityAccess:
    ops: EntityOperations
    mapper: Callable[[Any], BaseModel]
    to_values: Callable[[Any], dict[str, Any]]


def clamp_page(
    limit: Any, offset: Any, default: int, maximum: int
) -> tuple[int, int]:
    """Clamp raw pagination parameters.

    Unreadable or zero limits fall back to the default; the limit is then
    kept within [1, maximum] and the offset at or above zero.
    """
    parsed_limit = mappers.as_number(limit)
    parsed_offset = mappers.as_number(offset)
    page_size = int(parsed_limit) if parsed_limit else default
    start = int(parsed_offset) if parsed_offset else 0
    return min(max(page_size, 1), maximum), max(start, 0)


class DatabaseOperations:
    """Database operations handler for the API."""

    def __init__(self, config: NpcDBSettings | None = None):
        """Initialize database operations."""
        self.config = config or get_settings()
        self._manager: DatabaseConnectionManager | None = None
        self._access: dict[EntityKind, _EntityAccess] = {}

    async def initialize(self) -> None:
        """Create the schema if needed and open the connection pool."""
        created = await asyncio.to_thread(
            initialize_schema, self.config.database_path
        )
        if created:
            logger.info(
                "Initialized database schema",
                db_path=str(self.config.database_path),
            )
        self._manager = DatabaseConnectionManager(self.config)
        manager = self._manager
        self.movies = MovieOperations(manager)
        self.characters = CharacterOperations(manager)
        self.scenes = SceneOperations(manager)
        self.subtitles = SubtitleSegmentOperations(manager)
        self.references = MovieReferenceOperations(manager)
        self.notes = CharacterNoteOperations(manager)
        self.scripts = MovieScriptOperations(manager)
        self.dialogues = MovieDialogueFileOperations(manager)
        self._access = {
            EntityKind.MOVIE: _EntityAccess(
                self.movies, mappers.map_movie, MovieOperations.to_values
            ),
            EntityKind.CHARACTER: _EntityAccess(
                self.characters,
                mappers.map_character,
                CharacterOperations.to_values,
            ),
            EntityKind.SCENE: _EntityAccess(
                self.scenes, mappers.map_scene, SceneOperations.to_values
            ),
            EntityKind.SUBTITLE_SEGMENT: _EntityAccess(
                self.subtitles,
                mappers.map_subtitle_segment,
                SubtitleSegmentOperations.to_values,
            ),
            EntityKind.REFERENCE: _EntityAccess(
                self.references,
                mappers.map_movie_reference,
                MovieReferenceOperations.to_values,
            ),
            EntityKind.CHARACTER_NOTE: _EntityAccess(
                self.notes,
                mappers.map_character_note,
                CharacterNoteOperations.to_values,
            ),
            EntityKind.MOVIE_SCRIPT: _EntityAccess(
                self.scripts,
                mappers.map_movie_script,
                MovieScriptOperations.to_values,
            ),
            EntityKind.MOVIE_DIALOGUE: _EntityAccess(
                self.dialogues,
                mappers.map_movie_dialogue_file,
                MovieDialogueFileOperations.to_values,
            ),
        }

    async def close(self) -> None:
        """Close the connection pool."""
        if self._manager is not None:
            self._manager.close()
            self._manager = None

    def _entity(self, kind: EntityKind) -> _EntityAccess:
        if self._manager is None:
            raise DatabaseError(
                "Database operations are not initialized",
                hint="Call initialize() before using the data-access context",
            )
        return self._access[kind]

    async def exists(self, kind: EntityKind, entity_id: str) -> bool:
        """Return True if the entity exists."""
        access = self._entity(kind)
        return await asyncio.to_thread(access.ops.exists, entity_id)

    async def get(self, kind: EntityKind, entity_id: str) -> Any:
        """Point lookup, mapped to its entity model (None when absent)."""
        access = self._entity(kind)
        row = await asyncio.to_thread(access.ops.get, entity_id)
        return access.mapper(row) if row is not None else None

    async def list_children(self, kind: EntityKind, parent_id: str) -> list[Any]:
        """All entities of a kind under one parent, in collection order."""
        access = self._entity(kind)
        rows = await asyncio.to_thread(access.ops.list_for_parent, parent_id)
        return [access.mapper(row) for row in rows]

    async def create(self, kind: EntityKind, payload: BaseModel) -> Any:
        """Insert a validated payload and return the stored entity."""
        access = self._entity(kind)
        entity_id = await asyncio.to_thread(
            access.ops.insert, access.to_values(payload)
        )
        row = await asyncio.to_thread(access.ops.get, entity_id)
        if row is None:
            raise DatabaseError(
                f"Created {kind.value} could not be read back",
                details={"id": entity_id},
            )
        return access.mapper(row)

    async def update(
        self, kind: EntityKind, entity_id: str, payload: BaseModel
    ) -> Any:
        """Persist a validated payload and return the re-read entity.

        Returns None when the row no longer exists.
        """
        access = self._entity(kind)
        changed = await asyncio.to_thread(
            access.ops.update, entity_id, access.to_values(payload)
        )
        if not changed:
            return None
        # Re-read so trigger-maintained columns are current
        row = await asyncio.to_thread(access.ops.get, entity_id)
        return access.mapper(row) if row is not None else None

    async def delete(self, kind: EntityKind, entity_id: str) -> bool:
        """Hard delete; False when nothing was removed."""
        access = self._entity(kind)
        removed = await asyncio.to_thread(access.ops.delete, entity_id)
        return removed > 0

    async def list_movies(
        self, search: str | None = None, limit: Any = None, offset: Any = None
    ) -> Page:
        """Page through movies, newest first."""
        self._entity(EntityKind.MOVIE)
        page_size, start = clamp_page(limit, offset, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)
        term = search.strip() if search else None
        rows = await asyncio.to_thread(
            self.movies.list_movies, term or None, page_size, start
        )
        items: list[Movie] = [mappers.map_movie(row) for row in rows]
        return Page(
            items=items,
            pagination=Pagination(limit=page_size, offset=start, count=len(items)),
        )

    async def list_subtitle_segments(
        self, movie_id: str, limit: Any = None, offset: Any = None
    ) -> Page:
        """Page through a movie's subtitles in playback order."""
        self._entity(EntityKind.SUBTITLE_SEGMENT)
        page_size, start = clamp_page(
            limit, offset, DEFAULT_SUBTITLE_PAGE_SIZE, MAX_SUBTITLE_PAGE_SIZE
        )
        rows = await asyncio.to_thread(
            self.subtitles.list_segments, movie_id, page_size, start
        )
        items: list[SubtitleSegment] = [
            mappers.map_subtitle_segment(row) for row in rows
        ]
        return Page(
            items=items,
            pagination=Pagination(limit=page_size, offset=start, count=len(items)),
        )

    async def get_counts(self) -> dict[str, int]:
        """Row counts per entity table."""
        counts: dict[str, int] = {}
        for kind in EntityKind:
            access = self._entity(kind)
            counts[access.ops.table] = await asyncio.to_thread(access.ops.count)
        return counts
