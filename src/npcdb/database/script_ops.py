"""Movie script and dialogue file data access."""

from typing import Any

from npcdb.models import MovieDialogueFilePayload, MovieScriptPayload

from .base import EntityOperations


class MovieScriptOperations(EntityOperations):
    """Operations on the ``movie_scripts`` table."""

    table = "movie_scripts"
    parent_column = "movie_id"
    columns = ("movie_id", "script_title", "plot_text", "screenplay_text", "created_by")

    @staticmethod
    def to_values(payload: MovieScriptPayload) -> dict[str, Any]:
        """Column values for a validated payload."""
        return payload.model_dump(include=set(MovieScriptOperations.columns))


class MovieDialogueFileOperations(EntityOperations):
    """Operations on the ``movie_dialogue_files`` table."""

    table = "movie_dialogue_files"
    parent_column = "movie_id"
    columns = ("movie_id", "file_name", "dialogue_text", "total_lines", "created_by")

    @staticmethod
    def to_values(payload: MovieDialogueFilePayload) -> dict[str, Any]:
        """Column values for a validated payload."""
        return payload.model_dump(include=set(MovieDialogueFileOperations.columns))
