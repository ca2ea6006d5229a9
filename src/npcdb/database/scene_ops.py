"""Scene and subtitle segment data access."""

import sqlite3
from typing import Any

from npcdb.models import ScenePayload, SubtitleSegmentPayload

from .base import EntityOperations

DEFAULT_SUBTITLE_PAGE_SIZE = 100
MAX_SUBTITLE_PAGE_SIZE = 500


class SceneOperations(EntityOperations):
    """Operations on the ``scenes`` table."""

    table = "scenes"
    parent_column = "movie_id"
    order_by = "scene_number ASC, rowid ASC"
    columns = (
        "movie_id",
        "scene_number",
        "start_ms",
        "end_ms",
        "summary",
        "location",
        "chapter",
    )

    @staticmethod
    def to_values(payload: ScenePayload) -> dict[str, Any]:
        """Column values for a validated payload."""
        return payload.model_dump(include=set(SceneOperations.columns))


class SubtitleSegmentOperations(EntityOperations):
    """Operations on the ``subtitle_segments`` table."""

    table = "subtitle_segments"
    parent_column = "movie_id"
    order_by = "start_ms ASC, rowid ASC"
    columns = (
        "movie_id",
        "scene_id",
        "character_id",
        "start_ms",
        "end_ms",
        "speaker",
        "text",
        "confidence",
        "source",
    )

    @staticmethod
    def to_values(payload: SubtitleSegmentPayload) -> dict[str, Any]:
        """Column values for a validated payload."""
        return payload.model_dump(include=set(SubtitleSegmentOperations.columns))

    def list_segments(
        self, movie_id: str, limit: int, offset: int
    ) -> list[sqlite3.Row]:
        """One page of a movie's subtitles in playback order."""
        return self._fetch_all(
            f"{self._select()} WHERE movie_id = :movie_id "
            f"ORDER BY {self.order_by} LIMIT :limit OFFSET :offset",
            {"movie_id": movie_id, "limit": limit, "offset": offset},
        )
