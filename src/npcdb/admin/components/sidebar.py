from __future__ import annotations

from dataclasses import dataclass

import streamlit as st


@dataclass(frozen=True)
class SidebarState:
    view: str
    api_base_url: str


NAV_ITEMS = [
    ("📖 Narrative", "narrative"),
    ("🎬 Movies", "movies"),
    ("📜 Scripts", "scripts"),
    ("💬 Dialogues", "dialogues"),
    ("🎭 Characters", "characters"),
    ("📝 Character notes", "notes"),
    ("🎞️ Scenes", "scenes"),
    ("🔤 Subtitles", "subtitles"),
    ("📚 References", "references"),
]


def render_sidebar(default_base_url: str, api_healthy: bool | None = None) -> SidebarState:
    with st.sidebar:
        st.markdown("### 🧭 NPC Database")
        st.caption("Movie and character narrative admin")

        labels = [label for label, _ in NAV_ITEMS]
        default_label = st.session_state.get("nav_label", labels[0])
        idx = labels.index(default_label) if default_label in labels else 0

        label = st.radio(
            "Nav",
            labels,
            index=idx,
            label_visibility="collapsed",
        )
        st.session_state["nav_label"] = label
        view = dict(NAV_ITEMS)[label]

        with st.expander("⚙️ Settings", expanded=False):
            base_url = st.text_input(
                "API base URL",
                value=st.session_state.get("api_base_url", default_base_url),
                help="Root of the REST API, including the /api prefix.",
            )
            st.session_state["api_base_url"] = base_url.rstrip("/")
            if api_healthy is True:
                st.success("API reachable")
            elif api_healthy is False:
                st.warning("API not reachable")

    return SidebarState(
        view=view,
        api_base_url=st.session_state.get("api_base_url", default_base_url),
    )
