"""Movie reference data access."""

from typing import Any

from npcdb.models import MovieReferencePayload

from .base import EntityOperations


class MovieReferenceOperations(EntityOperations):
    """Operations on the ``movie_references`` table."""

    table = "movie_references"
    parent_column = "movie_id"
    columns = ("movie_id", "type", "title", "content", "source_url", "created_by")

    @staticmethod
    def to_values(payload: MovieReferencePayload) -> dict[str, Any]:
        """Column values for a validated payload."""
        return payload.model_dump(include=set(MovieReferenceOperations.columns))
