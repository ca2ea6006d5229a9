from __future__ import annotations

from typing import Any

import streamlit as st

from npcdb.admin.client import AdminApiClient
from npcdb.admin.components.manager import ManagerSpec, render_manager
from npcdb.admin.components.selectors import select_movie
from npcdb.admin.state import optional_text

REFERENCE_TYPES = ["plot_point", "background", "trivia", "marketing"]


def _form(item: dict[str, Any], form_id: str) -> dict[str, Any]:
    current = item.get("type", REFERENCE_TYPES[0])
    ref_type = st.selectbox(
        "Type",
        REFERENCE_TYPES,
        index=REFERENCE_TYPES.index(current) if current in REFERENCE_TYPES else 0,
        key=f"{form_id}_type",
    )
    title = st.text_input("Title", value=item.get("title") or "", key=f"{form_id}_title")
    content = st.text_area(
        "Content *", value=item.get("content", ""), key=f"{form_id}_content"
    )
    source_url = st.text_input(
        "Source URL", value=item.get("sourceUrl") or "", key=f"{form_id}_url"
    )
    return {"type": ref_type, "title": title, "content": content, "sourceUrl": source_url}


def _to_payload(values: dict[str, Any]) -> dict[str, Any]:
    if not values["content"].strip():
        raise ValueError("Reference content is required")
    return {
        "type": values["type"],
        "title": optional_text(values["title"]),
        "content": values["content"],
        "sourceUrl": optional_text(values["sourceUrl"]),
    }


def _describe(item: dict[str, Any]) -> tuple[str, str]:
    heading = f"[{item.get('type', '')}] {item.get('title') or ''}".strip()
    return heading, item.get("content", "")


def render(client: AdminApiClient) -> None:
    st.title("References")
    movie_id = select_movie(client, key="references")
    if not movie_id:
        return
    spec = ManagerSpec(
        key="references",
        title="Reference",
        load=client.list_references,
        create=client.create_reference,
        update=client.update_reference,
        delete=client.delete_reference,
        form=_form,
        to_payload=_to_payload,
        describe=_describe,
    )
    render_manager(spec, movie_id)
