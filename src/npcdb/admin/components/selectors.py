"""Parent selectors (movie, character) used by the child managers."""

from __future__ import annotations

from typing import Any

import streamlit as st

from npcdb.admin.client import AdminApiClient, AdminApiError
from npcdb.admin.components.banner import set_error

MOVIES_KEY = "movies_items"


def load_movies(client: AdminApiClient, force: bool = False) -> list[dict[str, Any]]:
    """Movies shared across sections; fetched once, then spliced."""
    if force or MOVIES_KEY not in st.session_state:
        try:
            st.session_state[MOVIES_KEY] = client.list_movies(limit=100)
        except AdminApiError as e:
            set_error(e.message)
            st.session_state[MOVIES_KEY] = []
    movies: list[dict[str, Any]] = st.session_state[MOVIES_KEY]
    return movies


def movie_label(movie: dict[str, Any]) -> str:
    year = movie.get("releaseYear")
    return f"{movie.get('title', '')} ({year})" if year else str(movie.get("title", ""))


def select_movie(client: AdminApiClient, key: str) -> str | None:
    """Movie dropdown; returns the selected id or None when there are none."""
    movies = load_movies(client)
    if not movies:
        st.info("Create a movie first.")
        return None
    ids = [m["id"] for m in movies]
    labels = {m["id"]: movie_label(m) for m in movies}
    selected: str = st.selectbox(
        "Movie",
        ids,
        format_func=lambda movie_id: labels.get(movie_id, movie_id),
        key=f"{key}_movie",
    )
    return selected


def select_character(client: AdminApiClient, movie_id: str, key: str) -> str | None:
    """Character dropdown for one movie."""
    cache_key = f"characters_items_{movie_id}"
    if cache_key not in st.session_state:
        try:
            st.session_state[cache_key] = client.list_characters(movie_id)
        except AdminApiError as e:
            set_error(e.message)
            st.session_state[cache_key] = []
    characters: list[dict[str, Any]] = st.session_state[cache_key]
    if not characters:
        st.info("This movie has no characters yet.")
        return None
    ids = [c["id"] for c in characters]
    names = {c["id"]: c.get("name", "") for c in characters}
    selected: str = st.selectbox(
        "Character",
        ids,
        format_func=lambda character_id: names.get(character_id, character_id),
        key=f"{key}_character",
    )
    return selected
