"""
Routing only.

All section logic lives in npcdb/admin/views/. Launch with:
    streamlit run src/npcdb/admin/app.py
"""

from __future__ import annotations

import streamlit as st

from npcdb.admin.client import AdminApiClient
from npcdb.admin.components.banner import render_error_banner
from npcdb.admin.components.sidebar import render_sidebar
from npcdb.admin.views import (
    characters,
    dialogues,
    movies,
    narrative,
    notes,
    references,
    scenes,
    scripts,
    subtitles,
)
from npcdb.config import get_settings

VIEWS = {
    "narrative": narrative.render,
    "movies": movies.render,
    "scripts": scripts.render,
    "dialogues": dialogues.render,
    "characters": characters.render,
    "notes": notes.render,
    "scenes": scenes.render,
    "subtitles": subtitles.render,
    "references": references.render,
}


@st.cache_resource
def get_client(base_url: str) -> AdminApiClient:
    return AdminApiClient(base_url)


def main() -> None:
    st.set_page_config(page_title="NPC Database Admin", page_icon="🎬", layout="wide")
    settings = get_settings()
    base_url = st.session_state.get("api_base_url", settings.api_base_url)
    client = get_client(base_url)

    state = render_sidebar(settings.api_base_url, api_healthy=client.health())
    if state.api_base_url != base_url:
        client = get_client(state.api_base_url)

    render_error_banner()

    view = VIEWS.get(state.view)
    if view is None:
        st.error("Unknown view")
        return
    view(client)


if __name__ == "__main__":
    main()
