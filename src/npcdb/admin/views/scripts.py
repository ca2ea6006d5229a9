from __future__ import annotations

from typing import Any

import streamlit as st

from npcdb.admin.client import AdminApiClient
from npcdb.admin.components.manager import ManagerSpec, render_manager
from npcdb.admin.components.selectors import select_movie
from npcdb.admin.state import optional_text


def _form(item: dict[str, Any], form_id: str) -> dict[str, Any]:
    script_title = st.text_input(
        "Script title", value=item.get("scriptTitle") or "", key=f"{form_id}_title"
    )
    plot_text = st.text_area(
        "Plot", value=item.get("plotText") or "", key=f"{form_id}_plot"
    )
    screenplay = st.text_area(
        "Screenplay *",
        value=item.get("screenplayText", ""),
        height=240,
        key=f"{form_id}_screenplay",
    )
    return {"scriptTitle": script_title, "plotText": plot_text, "screenplayText": screenplay}


def _to_payload(values: dict[str, Any]) -> dict[str, Any]:
    if not values["screenplayText"].strip():
        raise ValueError("Screenplay text is required")
    return {
        "scriptTitle": optional_text(values["scriptTitle"]),
        "plotText": optional_text(values["plotText"]),
        "screenplayText": values["screenplayText"],
    }


def _describe(item: dict[str, Any]) -> tuple[str, str]:
    preview = item.get("screenplayText", "").splitlines()
    return item.get("scriptTitle") or "Untitled script", " ".join(preview[:2])


def render(client: AdminApiClient) -> None:
    st.title("Scripts")
    movie_id = select_movie(client, key="scripts")
    if not movie_id:
        return
    spec = ManagerSpec(
        key="scripts",
        title="Script",
        load=client.list_scripts,
        create=client.create_script,
        update=client.update_script,
        delete=client.delete_script,
        form=_form,
        to_payload=_to_payload,
        describe=_describe,
    )
    render_manager(spec, movie_id)
