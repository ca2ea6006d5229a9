"""HTTP client for the NPC database REST API."""

from __future__ import annotations

from typing import Any

import httpx

DEFAULT_ERROR_MESSAGE = "Request failed, please try again later."
DEFAULT_TIMEOUT = 10.0


class AdminApiError(Exception):
    """A request failed; ``message`` is safe to show in the UI."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize the error.

        Args:
            message: Server-supplied error text or the caller's fallback
            status_code: HTTP status, None when no response arrived
        """
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class AdminApiClient:
    """Thin wrapper over every REST endpoint used by the admin UI."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root including the ``/api`` prefix
            timeout: Request timeout in seconds
            transport: Optional transport (tests pass ``httpx.MockTransport``)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def __enter__(self) -> AdminApiClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def _request_json(
        self,
        method: str,
        path: str,
        fallback: str = DEFAULT_ERROR_MESSAGE,
        **kwargs: Any,
    ) -> Any:
        """Send a request and unwrap the success envelope.

        Raises:
            AdminApiError: On transport failure, non-2xx status or a body
                without ``success``/``data``
        """
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise AdminApiError(fallback) from e

        body: Any = None
        if "application/json" in response.headers.get("content-type", ""):
            try:
                body = response.json()
            except ValueError:
                body = None

        if not response.is_success:
            message = None
            if isinstance(body, dict):
                message = body.get("error") or body.get("message")
            raise AdminApiError(message or fallback, response.status_code)

        if not isinstance(body, dict) or not body.get("success") or "data" not in body:
            raise AdminApiError(fallback, response.status_code)
        return body["data"]

    # Health
    def health(self) -> bool:
        """Return True if the API answers its health check."""
        try:
            response = self._client.get("/health")
        except httpx.HTTPError:
            return False
        return response.is_success

    # Movies
    def list_movies(
        self, search: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[dict[str, Any]]:
        """Fetch one page of movies (the server caps pages at 100)."""
        params: dict[str, Any] = {"limit": limit, "offset": offset}
        if search:
            params["search"] = search
        data = self._request_json(
            "GET", "/movies", "Failed to load movies.", params=params
        )
        items: list[dict[str, Any]] = data.get("items", [])
        return items

    def get_movie(self, movie_id: str) -> dict[str, Any]:
        """Fetch one movie."""
        return self._request_json("GET", f"/movies/{movie_id}", "Failed to load movie.")

    def create_movie(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Create a movie."""
        return self._request_json(
            "POST", "/movies", "Failed to create movie.", json=payload
        )

    def update_movie(self, movie_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Update a movie."""
        return self._request_json(
            "PUT", f"/movies/{movie_id}", "Failed to update movie.", json=payload
        )

    def delete_movie(self, movie_id: str) -> dict[str, Any]:
        """Delete a movie."""
        return self._request_json(
            "DELETE", f"/movies/{movie_id}", "Failed to delete movie."
        )

    # Characters
    def list_characters(self, movie_id: str) -> list[dict[str, Any]]:
        """Characters of a movie."""
        return self._request_json(
            "GET", f"/movies/{movie_id}/characters", "Failed to load characters."
        )

    def create_character(
        self, movie_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """Create a character under a movie."""
        return self._request_json(
            "POST",
            f"/movies/{movie_id}/characters",
            "Failed to create character.",
            json=payload,
        )

    def update_character(
        self, character_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """Update a character."""
        return self._request_json(
            "PUT",
            f"/characters/{character_id}",
            "Failed to update character.",
            json=payload,
        )

    def delete_character(self, character_id: str) -> dict[str, Any]:
        """Delete a character."""
        return self._request_json(
            "DELETE", f"/characters/{character_id}", "Failed to delete character."
        )

    # Scenes
    def list_scenes(self, movie_id: str) -> list[dict[str, Any]]:
        """Scenes of a movie, by scene number."""
        return self._request_json(
            "GET", f"/movies/{movie_id}/scenes", "Failed to load scenes."
        )

    def create_scene(self, movie_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Create a scene under a movie."""
        return self._request_json(
            "POST",
            f"/movies/{movie_id}/scenes",
            "Failed to create scene.",
            json=payload,
        )

    def update_scene(self, scene_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Update a scene."""
        return self._request_json(
            "PUT", f"/scenes/{scene_id}", "Failed to update scene.", json=payload
        )

    def delete_scene(self, scene_id: str) -> dict[str, Any]:
        """Delete a scene."""
        return self._request_json(
            "DELETE", f"/scenes/{scene_id}", "Failed to delete scene."
        )

    # Subtitle segments
    def list_subtitle_segments(
        self, movie_id: str, limit: int = 500, offset: int = 0
    ) -> list[dict[str, Any]]:
        """One page of a movie's subtitles in playback order."""
        data = self._request_json(
            "GET",
            f"/movies/{movie_id}/subtitle-segments",
            "Failed to load subtitles.",
            params={"limit": limit, "offset": offset},
        )
        items: list[dict[str, Any]] = data.get("items", [])
        return items

    def create_subtitle_segment(
        self, movie_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """Create a subtitle segment under a movie."""
        return self._request_json(
            "POST",
            f"/movies/{movie_id}/subtitle-segments",
            "Failed to create subtitle.",
            json=payload,
        )

    def update_subtitle_segment(
        self, segment_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """Update a subtitle segment."""
        return self._request_json(
            "PUT",
            f"/subtitle-segments/{segment_id}",
            "Failed to update subtitle.",
            json=payload,
        )

    def delete_subtitle_segment(self, segment_id: str) -> dict[str, Any]:
        """Delete a subtitle segment."""
        return self._request_json(
            "DELETE",
            f"/subtitle-segments/{segment_id}",
            "Failed to delete subtitle.",
        )

    # References
    def list_references(self, movie_id: str) -> list[dict[str, Any]]:
        """References of a movie."""
        return self._request_json(
            "GET", f"/movies/{movie_id}/references", "Failed to load references."
        )

    def create_reference(
        self, movie_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """Create a reference under a movie."""
        return self._request_json(
            "POST",
            f"/movies/{movie_id}/references",
            "Failed to create reference.",
            json=payload,
        )

    def update_reference(
        self, reference_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """Update a reference."""
        return self._request_json(
            "PUT",
            f"/references/{reference_id}",
            "Failed to update reference.",
            json=payload,
        )

    def delete_reference(self, reference_id: str) -> dict[str, Any]:
        """Delete a reference."""
        return self._request_json(
            "DELETE", f"/references/{reference_id}", "Failed to delete reference."
        )

    # Character notes
    def list_notes(self, character_id: str) -> list[dict[str, Any]]:
        """Notes of a character."""
        return self._request_json(
            "GET", f"/characters/{character_id}/notes", "Failed to load notes."
        )

    def create_note(
        self, character_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """Create a note under a character."""
        return self._request_json(
            "POST",
            f"/characters/{character_id}/notes",
            "Failed to create note.",
            json=payload,
        )

    def update_note(self, note_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Update a note."""
        return self._request_json(
            "PUT", f"/notes/{note_id}", "Failed to update note.", json=payload
        )

    def delete_note(self, note_id: str) -> dict[str, Any]:
        """Delete a note."""
        return self._request_json(
            "DELETE", f"/notes/{note_id}", "Failed to delete note."
        )

    # Scripts
    def list_scripts(self, movie_id: str) -> list[dict[str, Any]]:
        """Scripts of a movie."""
        return self._request_json(
            "GET", f"/movies/{movie_id}/scripts", "Failed to load scripts."
        )

    def create_script(self, movie_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Create a script under a movie."""
        return self._request_json(
            "POST",
            f"/movies/{movie_id}/scripts",
            "Failed to create script.",
            json=payload,
        )

    def update_script(self, script_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Update a script."""
        return self._request_json(
            "PUT",
            f"/movie-scripts/{script_id}",
            "Failed to update script.",
            json=payload,
        )

    def delete_script(self, script_id: str) -> dict[str, Any]:
        """Delete a script."""
        return self._request_json(
            "DELETE", f"/movie-scripts/{script_id}", "Failed to delete script."
        )

    # Dialogue files
    def list_dialogues(self, movie_id: str) -> list[dict[str, Any]]:
        """Dialogue files of a movie."""
        return self._request_json(
            "GET", f"/movies/{movie_id}/dialogues", "Failed to load dialogue files."
        )

    def create_dialogue(
        self, movie_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """Create a dialogue file under a movie."""
        return self._request_json(
            "POST",
            f"/movies/{movie_id}/dialogues",
            "Failed to create dialogue file.",
            json=payload,
        )

    def update_dialogue(
        self, dialogue_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """Update a dialogue file."""
        return self._request_json(
            "PUT",
            f"/movie-dialogues/{dialogue_id}",
            "Failed to update dialogue file.",
            json=payload,
        )

    def delete_dialogue(self, dialogue_id: str) -> dict[str, Any]:
        """Delete a dialogue file."""
        return self._request_json(
            "DELETE",
            f"/movie-dialogues/{dialogue_id}",
            "Failed to delete dialogue file.",
        )

    # Narrative
    def generate_narrative(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Request the stub narrative."""
        return self._request_json(
            "POST",
            "/narrative",
            "Generation request failed, please try again later.",
            json=payload,
        )
