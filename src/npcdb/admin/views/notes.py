from __future__ import annotations

from typing import Any

import streamlit as st

from npcdb.admin.client import AdminApiClient
from npcdb.admin.components.manager import ManagerSpec, render_manager
from npcdb.admin.components.selectors import select_character, select_movie
from npcdb.admin.state import optional_text

NOTE_TYPES = ["persona", "relationship", "backstory", "speech_pattern", "other"]


def _form(item: dict[str, Any], form_id: str) -> dict[str, Any]:
    current = item.get("noteType", NOTE_TYPES[0])
    note_type = st.selectbox(
        "Note type",
        NOTE_TYPES,
        index=NOTE_TYPES.index(current) if current in NOTE_TYPES else 0,
        key=f"{form_id}_type",
    )
    content = st.text_area(
        "Content *", value=item.get("content", ""), key=f"{form_id}_content"
    )
    source = st.text_input(
        "Source", value=item.get("source") or "", key=f"{form_id}_source"
    )
    return {"noteType": note_type, "content": content, "source": source}


def _to_payload(values: dict[str, Any]) -> dict[str, Any]:
    if not values["content"].strip():
        raise ValueError("Note content is required")
    return {
        "noteType": values["noteType"],
        "content": values["content"],
        "source": optional_text(values["source"]),
    }


def _describe(item: dict[str, Any]) -> tuple[str, str]:
    return f"[{item.get('noteType', '')}] {item.get('content', '')}", (
        item.get("source") or ""
    )


def render(client: AdminApiClient) -> None:
    st.title("Character notes")
    movie_id = select_movie(client, key="notes")
    if not movie_id:
        return
    character_id = select_character(client, movie_id, key="notes")
    if not character_id:
        return
    spec = ManagerSpec(
        key="notes",
        title="Note",
        load=client.list_notes,
        create=client.create_note,
        update=client.update_note,
        delete=client.delete_note,
        form=_form,
        to_payload=_to_payload,
        describe=_describe,
    )
    render_manager(spec, character_id)
