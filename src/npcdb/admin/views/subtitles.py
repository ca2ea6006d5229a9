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
        start_ms = st.text_input(
            "Start (ms) *", value=_text(item.get("startMs")), key=f"{form_id}_start"
        )
    with c2:
        end_ms = st.text_input(
            "End (ms) *", value=_text(item.get("endMs")), key=f"{form_id}_end"
        )
    with c3:
        confidence = st.text_input(
            "Confidence", value=_text(item.get("confidence")), key=f"{form_id}_conf"
        )
    speaker = st.text_input(
        "Speaker", value=item.get("speaker") or "", key=f"{form_id}_speaker"
    )
    text = st.text_area("Text *", value=item.get("text", ""), key=f"{form_id}_text")
    c4, c5, c6 = st.columns(3)
    with c4:
        scene_id = st.text_input(
            "Scene ID", value=item.get("sceneId") or "", key=f"{form_id}_scene"
        )
    with c5:
        character_id = st.text_input(
            "Character ID",
            value=item.get("characterId") or "",
            key=f"{form_id}_character",
        )
    with c6:
        source = st.text_input(
            "Source", value=item.get("source") or "", key=f"{form_id}_source"
        )
    return {
        "startMs": start_ms,
        "endMs": end_ms,
        "confidence": confidence,
        "speaker": speaker,
        "text": text,
        "sceneId": scene_id,
        "characterId": character_id,
        "source": source,
    }


def _to_payload(values: dict[str, Any]) -> dict[str, Any]:
    start_ms = optional_number(values["startMs"], "Start time")
    end_ms = optional_number(values["endMs"], "End time")
    if start_ms is None or end_ms is None:
        raise ValueError("Start and end times are required")
    if not values["text"].strip():
        raise ValueError("Subtitle text is required")
    return {
        "startMs": start_ms,
        "endMs": end_ms,
        "confidence": optional_number(values["confidence"], "Confidence"),
        "speaker": optional_text(values["speaker"]),
        "text": values["text"],
        "sceneId": optional_text(values["sceneId"]),
        "characterId": optional_text(values["characterId"]),
        "source": optional_text(values["source"]),
    }


def _describe(item: dict[str, Any]) -> tuple[str, str]:
    speaker = f"{item['speaker']}: " if item.get("speaker") else ""
    timing = f"{_text(item.get('startMs'))}–{_text(item.get('endMs'))} ms"
    return f"{speaker}{item.get('text', '')}", timing


def render(client: AdminApiClient) -> None:
    st.title("Subtitles")
    movie_id = select_movie(client, key="subtitles")
    if not movie_id:
        return
    spec = ManagerSpec(
        key="subtitles",
        title="Subtitle",
        load=client.list_subtitle_segments,
        create=client.create_subtitle_segment,
        update=client.update_subtitle_segment,
        delete=client.delete_subtitle_segment,
        form=_form,
        to_payload=_to_payload,
        describe=_describe,
    )
    render_manager(spec, movie_id)
