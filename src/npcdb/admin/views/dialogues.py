from __future__ import annotations

from typing import Any

import streamlit as st

from npcdb.admin.client import AdminApiClient
from npcdb.admin.components.manager import ManagerSpec, render_manager
from npcdb.admin.components.selectors import select_movie
from npcdb.admin.state import count_nonblank_lines, optional_text


def _form(item: dict[str, Any], form_id: str) -> dict[str, Any]:
    file_name = st.text_input(
        "File name", value=item.get("fileName") or "", key=f"{form_id}_file"
    )
    uploaded = st.file_uploader(
        "Load from a text file", type=["txt", "srt"], key=f"{form_id}_upload"
    )
    dialogue = st.text_area(
        "Dialogue text *",
        value=item.get("dialogueText", ""),
        height=240,
        key=f"{form_id}_dialogue",
    )
    return {"fileName": file_name, "dialogueText": dialogue, "upload": uploaded}


def _to_payload(values: dict[str, Any]) -> dict[str, Any]:
    text = values["dialogueText"]
    file_name = optional_text(values["fileName"])
    upload = values.get("upload")
    if upload is not None and not text.strip():
        text = upload.getvalue().decode("utf-8", errors="replace")
        file_name = file_name or upload.name
    if not text.strip():
        raise ValueError("Dialogue text is required")
    return {
        "fileName": file_name,
        "dialogueText": text,
        "totalLines": count_nonblank_lines(text),
    }


def _describe(item: dict[str, Any]) -> tuple[str, str]:
    lines = item.get("totalLines")
    return item.get("fileName") or "Untitled dialogue", (
        f"{lines} lines" if lines is not None else ""
    )


def render(client: AdminApiClient) -> None:
    st.title("Dialogues")
    movie_id = select_movie(client, key="dialogues")
    if not movie_id:
        return
    spec = ManagerSpec(
        key="dialogues",
        title="Dialogue file",
        load=client.list_dialogues,
        create=client.create_dialogue,
        update=client.update_dialogue,
        delete=client.delete_dialogue,
        form=_form,
        to_payload=_to_payload,
        describe=_describe,
    )
    render_manager(spec, movie_id)
