from __future__ import annotations

from typing import Any

import streamlit as st

from npcdb.admin.client import AdminApiClient
from npcdb.admin.components.manager import ManagerSpec, render_manager
from npcdb.admin.components.selectors import select_movie
from npcdb.admin.state import optional_number, optional_text


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _form(item: dict[str, Any], form_id: str) -> dict[str, Any]:
    c1, c2, c3 = st.columns(3)
    with c1:
        scene_number = st.text_input(
            "Scene number *",
            value=_text(item.get("sceneNumber")),
            key=f"{form_id}_number",
        )
    with c2:
        start_ms = st.text_input(
            "Start (ms)", value=_text(item.get("startMs")), key=f"{form_id}_start"
        )
    with c3:
        end_ms = st.text_input(
            "End (ms)", value=_text(item.get("endMs")), key=f"{form_id}_end"
        )
    location = st.text_input(
        "Location", value=item.get("location") or "", key=f"{form_id}_location"
    )
    chapter = st.text_input(
        "Chapter", value=item.get("chapter") or "", key=f"{form_id}_chapter"
    )
    summary = st.text_area(
        "Summary", value=item.get("summary") or "", key=f"{form_id}_summary"
    )
    return {
        "sceneNumber": scene_number,
        "startMs": start_ms,
        "endMs": end_ms,
        "location": location,
        "chapter": chapter,
        "summary": summary,
    }


def _to_payload(values: dict[str, Any]) -> dict[str, Any]:
    scene_number = optional_number(values["sceneNumber"], "Scene number")
    if scene_number is None:
        raise ValueError("Scene number is required")
    return {
        "sceneNumber": scene_number,
        "startMs": optional_number(values["startMs"], "Start time"),
        "endMs": optional_number(values["endMs"], "End time"),
        "location": optional_text(values["location"]),
        "chapter": optional_text(values["chapter"]),
        "summary": optional_text(values["summary"]),
    }


def _describe(item: dict[str, Any]) -> tuple[str, str]:
    heading = f"Scene {item.get('sceneNumber')}"
    if item.get("location"):
        heading += f" · {item['location']}"
    timing = ""
    if item.get("startMs") is not None or item.get("endMs") is not None:
        timing = f"{_text(item.get('startMs'))}–{_text(item.get('endMs'))} ms"
    parts = [timing, item.get("summary") or ""]
    return heading, " · ".join(p for p in parts if p)


def render(client: AdminApiClient) -> None:
    st.title("Scenes")
    movie_id = select_movie(client, key="scenes")
    if not movie_id:
        return
    spec = ManagerSpec(
        key="scenes",
        title="Scene",
        load=client.list_scenes,
        create=client.create_scene,
        update=client.update_scene,
        delete=client.delete_scene,
        form=_form,
        to_payload=_to_payload,
        describe=_describe,
    )
    render_manager(spec, movie_id)
