from __future__ import annotations

import streamlit as st

from npcdb.admin.client import AdminApiClient, AdminApiError
from npcdb.admin.state import NarrativeState, NarrativeStatus, missing_narrative_fields

STATE_KEY = "narrative_state"


def get_state() -> NarrativeState:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = NarrativeState()
    state: NarrativeState = st.session_state[STATE_KEY]
    return state


def generate(
    client: AdminApiClient, state: NarrativeState, request: dict[str, str]
) -> None:
    """Run one request through the state machine."""
    state.start()
    try:
        data = client.generate_narrative(request)
    except AdminApiError as e:
        state.fail(e.message)
        return
    state.succeed(request, data)


def render(client: AdminApiClient) -> None:
    st.title("Narrative")
    st.caption(
        "Placeholder first-person narrative built from a movie and a character name."
    )
    state = get_state()
    last = state.last_request or {}

    with st.form("narrative_form"):
        movie_title = st.text_input("Movie title", value=last.get("movieTitle", ""))
        character_name = st.text_input(
            "Character name", value=last.get("characterName", "")
        )
        modifiers = st.text_input(
            "Emphasis (optional)", value=last.get("promptModifiers", "")
        )
        submitted = st.form_submit_button(
            "Generate", disabled=state.status is NarrativeStatus.LOADING
        )

    if submitted:
        missing = missing_narrative_fields(movie_title, character_name)
        if missing:
            st.warning("Please fill in: " + ", ".join(missing))
        else:
            request = {
                "movieTitle": movie_title.strip(),
                "characterName": character_name.strip(),
            }
            if modifiers.strip():
                request["promptModifiers"] = modifiers.strip()
            with st.spinner("Generating the narrative..."):
                generate(client, state, request)

    st.caption(state.helper_text)
    if state.status is NarrativeStatus.SUCCESS and state.story:
        for paragraph in state.story.split("\n\n"):
            st.write(paragraph)
        if state.meta.get("generatedAt"):
            st.caption(f"Generated at {state.meta['generatedAt']}")
    elif state.status is NarrativeStatus.ERROR:
        st.error(state.error)

    if state.status in (NarrativeStatus.SUCCESS, NarrativeStatus.ERROR) and st.button(
        "Reset"
    ):
        state.reset()
        st.rerun()
