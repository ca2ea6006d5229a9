from __future__ import annotations

from typing import Any

import streamlit as st

from npcdb.admin.client import AdminApiClient
from npcdb.admin.components.manager import ManagerSpec, render_manager
from npcdb.admin.state import (
    format_comma_list,
    optional_number,
    optional_text,
    parse_comma_list,
)


def _form(item: dict[str, Any], form_id: str) -> dict[str, Any]:
    c1, c2 = st.columns(2)
    with c1:
        title = st.text_input("Title *", value=item.get("title", ""), key=f"{form_id}_title")
        release_year = st.text_input(
            "Release year",
            value=str(item.get("releaseYear") or ""),
            key=f"{form_id}_year",
        )
        language = st.text_input(
            "Language", value=item.get("language") or "", key=f"{form_id}_lang"
        )
    with c2:
        original_title = st.text_input(
            "Original title",
            value=item.get("originalTitle") or "",
            key=f"{form_id}_original",
        )
        runtime = st.text_input(
            "Runtime (minutes)",
            value=str(item.get("runtimeMinutes") or ""),
            key=f"{form_id}_runtime",
        )
        genres = st.text_input(
            "Genres (comma separated)",
            value=format_comma_list(item.get("genres")),
            key=f"{form_id}_genres",
        )
    poster_url = st.text_input(
        "Poster URL", value=item.get("posterUrl") or "", key=f"{form_id}_poster"
    )
    synopsis = st.text_area(
        "Synopsis", value=item.get("synopsis") or "", key=f"{form_id}_synopsis"
    )
    return {
        "title": title,
        "originalTitle": original_title,
        "releaseYear": release_year,
        "language": language,
        "runtimeMinutes": runtime,
        "genres": genres,
        "posterUrl": poster_url,
        "synopsis": synopsis,
    }


def _to_payload(values: dict[str, Any]) -> dict[str, Any]:
    if not values["title"].strip():
        raise ValueError("Movie title is required")
    return {
        "title": values["title"].strip(),
        "originalTitle": optional_text(values["originalTitle"]),
        "releaseYear": optional_number(values["releaseYear"], "Release year"),
        "language": optional_text(values["language"]),
        "runtimeMinutes": optional_number(values["runtimeMinutes"], "Runtime"),
        "genres": parse_comma_list(values["genres"]),
        "posterUrl": optional_text(values["posterUrl"]),
        "synopsis": optional_text(values["synopsis"]),
    }


def _describe(item: dict[str, Any]) -> tuple[str, str]:
    heading = item.get("title", "")
    if item.get("originalTitle"):
        heading += f" / {item['originalTitle']}"
    parts = [
        str(item["releaseYear"]) if item.get("releaseYear") else "",
        f"{item['runtimeMinutes']} min" if item.get("runtimeMinutes") else "",
        "、".join(item.get("genres") or []),
    ]
    return heading, " · ".join(p for p in parts if p)


def render(client: AdminApiClient) -> None:
    st.title("Movies")
    spec = ManagerSpec(
        key="movies",
        title="Movie",
        load=lambda _parent: client.list_movies(limit=100),
        create=lambda _parent, payload: client.create_movie(payload),
        update=client.update_movie,
        delete=client.delete_movie,
        form=_form,
        to_payload=_to_payload,
        describe=_describe,
    )
    render_manager(spec)
