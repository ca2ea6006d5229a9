"""Movie data access."""

import json
import sqlite3
from typing import Any

from npcdb.models import MoviePayload

from .base import EntityOperations

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class MovieOperations(EntityOperations):
    """Operations on the ``movies`` table."""

    table = "movies"
    columns = (
        "title",
        "original_title",
        "release_year",
        "language",
        "runtime_minutes",
        "genres",
        "poster_url",
        "synopsis",
    )

    @staticmethod
    def to_values(payload: MoviePayload) -> dict[str, Any]:
        """Column values for a validated payload."""
        return {
            "title": payload.title,
            "original_title": payload.original_title,
            "release_year": payload.release_year,
            "language": payload.language,
            "runtime_minutes": payload.runtime_minutes,
            "genres": json.dumps(payload.genres or [], ensure_ascii=False),
            "poster_url": payload.poster_url,
            "synopsis": payload.synopsis,
        }

    def list_movies(
        self, search: str | None, limit: int, offset: int
    ) -> list[sqlite3.Row]:
        """Newest movies first, optionally filtered by a title substring.

        Args:
            search: Case-insensitive title substring, None for no filter
            limit: Page size, already clamped by the caller
            offset: Rows to skip, already clamped by the caller
        """
        return self._fetch_all(
            f"{self._select()} "
            "WHERE (:search IS NULL "
            "OR lower(title) LIKE '%' || lower(:search) || '%' ESCAPE '\\') "
            f"ORDER BY {self.order_by} "
            "LIMIT :limit OFFSET :offset",
            {
                "search": escape_like(search) if search else None,
                "limit": limit,
                "offset": offset,
            },
        )
